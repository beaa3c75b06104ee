import requests

from rag_chat.core.config import settings


class ChatClientError(Exception):
    pass


class ChatClient:
    """Thin HTTP client for POST /rag-chat."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.CHAT_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.CHAT_API_KEY
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT_SECONDS * 3

    def ask(self, message: str) -> tuple[str, list[dict]]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        r = requests.post(
            f"{self.base_url}/rag-chat",
            json={"message": message},
            headers=headers,
            timeout=self.timeout,
        )
        if not r.ok:
            raise ChatClientError(f"API error: {r.status_code}")

        try:
            data = r.json()
        except ValueError as exc:
            raise ChatClientError("API error: invalid JSON body") from exc

        answer = data.get("answer") if isinstance(data, dict) else None
        sources = data.get("sources") if isinstance(data, dict) else None
        if not isinstance(answer, str):
            raise ChatClientError("API error: missing answer")
        if sources is None:
            sources = []
        if not isinstance(sources, list) or not all(isinstance(s, dict) for s in sources):
            raise ChatClientError("API error: malformed sources")
        return answer, sources
