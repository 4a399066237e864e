from dataclasses import dataclass
from datetime import datetime


@dataclass
class ChatRecord:
    """Represents a row from the chats table plus its assistant reply count."""

    id: str
    title: str
    assistant_message_count: int = 0
    updated_at: datetime | None = None


@dataclass
class MessageRecord:
    """Represents a row from the messages table."""

    id: str
    chat_id: str
    role: str
    content: str
    created_at: datetime | None = None
