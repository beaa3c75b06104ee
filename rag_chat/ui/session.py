from dataclasses import dataclass, field
from uuid import uuid4

import requests

from rag_chat.ui.client import ChatClient, ChatClientError
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)

ERROR_NOTICE = "Failed to get response. Please try again."


@dataclass(frozen=True)
class Message:
    text: str
    is_user: bool
    sources: tuple[dict, ...] | None = None
    id: str = field(default_factory=lambda: uuid4().hex)


class ChatSession:
    """
    Message history for one browser session.

    Owned by the caller (Streamlit keeps one per session in st.session_state).
    `submit` is synchronous; `is_loading` is True while it waits on the
    backend, and submits arriving meanwhile are ignored.
    """

    def __init__(self, client: ChatClient | None = None):
        self.client = client or ChatClient()
        self.messages: list[Message] = []
        self.is_loading = False
        self.last_error: str | None = None

    def submit(self, text: str) -> Message | None:
        """Returns the assistant message, or None if ignored or failed."""
        if not text or not text.strip() or self.is_loading:
            return None

        self.last_error = None
        self.messages.append(Message(text=text, is_user=True))
        self.is_loading = True
        try:
            answer, sources = self.client.ask(text)
        except (requests.RequestException, ChatClientError) as exc:
            logger.error("Chat error: %s", exc)
            self.last_error = ERROR_NOTICE
            return None
        finally:
            self.is_loading = False

        reply = Message(text=answer, is_user=False, sources=tuple(sources))
        self.messages.append(reply)
        return reply

    def clear(self) -> None:
        self.messages = []
        self.last_error = None
