class RagChatError(Exception):
    """
    Base error for the chat pipeline.

    `kind` tags the failure for logging ("input", "auth", "config",
    "upstream", "internal"); `status_code` is what the HTTP layer answers with.
    """

    kind = "internal"
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class InvalidInputError(RagChatError):
    kind = "input"
    status_code = 400

    def __init__(self, message: str = "Message is required"):
        super().__init__(message)


class AuthError(RagChatError):
    kind = "auth"
    status_code = 401

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class ConfigurationError(RagChatError):
    kind = "config"

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")
        self.missing = missing


class UpstreamError(RagChatError):
    kind = "upstream"

    def __init__(self, provider: str, message: str, status: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.status = status
