from abc import ABC, abstractmethod

from docchat.database.models import ChatRecord, MessageRecord


class BaseMessageStore(ABC):
    """Contract for the store that owns chats and their messages.

    Implementations are blocking; async callers dispatch them to a thread.
    All failures surface as PersistenceError.
    """

    @abstractmethod
    def create_message(self, chat_id: str, role: str, content: str) -> MessageRecord:
        """Append a message to a chat."""

    @abstractmethod
    def find_chat(self, chat_id: str) -> ChatRecord | None:
        """Return the chat with its assistant reply count, or None if unknown."""

    @abstractmethod
    def update_chat_title(self, chat_id: str, title: str) -> None:
        """Replace the chat title."""
