from psycopg import Error as PsycopgError
from psycopg.rows import dict_row

from docchat.database.connection import get_connection
from docchat.database.exceptions import PersistenceError
from docchat.database.models import ChatRecord, MessageRecord
from docchat.database.repositories.base import BaseMessageStore


class PostgresMessageStore(BaseMessageStore):
    """Database operations for the chats and messages tables."""

    def create_message(self, chat_id: str, role: str, content: str) -> MessageRecord:
        """Insert a message and touch the owning chat.

        Raises:
            PersistenceError: if the chat does not exist or the insert fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO messages (chat_id, role, content)
                        VALUES (%s, %s, %s)
                        RETURNING id, created_at
                        """,
                        (chat_id, role, content),
                    )
                    row = cur.fetchone()
                    cur.execute(
                        "UPDATE chats SET updated_at = NOW() WHERE id = %s",
                        (chat_id,),
                    )
                conn.commit()
        except PsycopgError as exc:
            raise PersistenceError(f"Failed to create message in chat {chat_id}: {exc}") from exc

        if row is None:
            raise PersistenceError(f"Insert into chat {chat_id} returned no row")
        return MessageRecord(
            id=str(row["id"]),
            chat_id=chat_id,
            role=role,
            content=content,
            created_at=row["created_at"],
        )

    def find_chat(self, chat_id: str) -> ChatRecord | None:
        """Find a chat by ID together with its assistant message count."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT c.id, c.title, c.updated_at,
                               COUNT(m.id) FILTER (WHERE m.role = 'assistant')
                                   AS assistant_message_count
                        FROM chats c
                        LEFT JOIN messages m ON m.chat_id = c.id
                        WHERE c.id = %s
                        GROUP BY c.id, c.title, c.updated_at
                        """,
                        (chat_id,),
                    )
                    row = cur.fetchone()
        except PsycopgError as exc:
            raise PersistenceError(f"Failed to load chat {chat_id}: {exc}") from exc

        if row is None:
            return None
        return ChatRecord(
            id=str(row["id"]),
            title=row["title"],
            assistant_message_count=row["assistant_message_count"],
            updated_at=row["updated_at"],
        )

    def update_chat_title(self, chat_id: str, title: str) -> None:
        """Persist a new chat title.

        Raises:
            PersistenceError: if no chat with this ID exists or the update fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE chats
                        SET title = %s, updated_at = NOW()
                        WHERE id = %s
                        """,
                        (title, chat_id),
                    )
                    if cur.rowcount == 0:
                        raise PersistenceError(f"Chat {chat_id} not found")
                conn.commit()
        except PsycopgError as exc:
            raise PersistenceError(f"Failed to update title of chat {chat_id}: {exc}") from exc
