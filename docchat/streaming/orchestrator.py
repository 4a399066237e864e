"""Drives one streamed completion from upstream request to persisted reply.

Failure handling follows what has already been committed on the client
connection:

* nothing written yet: the writer is failed with the error and the error
  propagates, so the caller can answer with a regular structured error response;
* frames already written: one ``{"error": ...}`` frame closes the stream and
  no ``[DONE]`` sentinel follows;
* client gone: upstream consumption stops, nothing more is written.

Only complete, non-empty answers are persisted. Partial answers from failed or
abandoned streams are discarded.
"""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum

from docchat.completion.client_base import BaseCompletionClient, ChatMessage
from docchat.database.exceptions import PersistenceError
from docchat.database.repositories.base import BaseMessageStore
from docchat.logging.logger import Log
from docchat.streaming.relay import StreamedAnswer, relay
from docchat.streaming.sse import DONE_FRAME, content_frame, error_frame
from docchat.streaming.writers import BaseStreamWriter, ClientDisconnectedError

ASSISTANT_ROLE = "assistant"


@dataclass(frozen=True)
class CompletionRequest:
    """Messages for the provider plus what is needed to persist the reply."""

    messages: list[ChatMessage]
    chat_id: str | None = None
    title_source: str | None = None


class StreamStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class StreamOutcome:
    status: StreamStatus
    answer: str = ""
    persisted: bool = False
    error: str | None = None


def derive_title(text: str, max_chars: int = 50) -> str:
    """First ``max_chars`` characters of ``text``, with ``...`` if cut."""
    if len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


class CompletionOrchestrator:
    """Streams an upstream completion to a client and persists the reply."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.7,
        store: BaseMessageStore | None = None,
        default_chat_title: str = "New chat",
        title_max_chars: int = 50,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(2.0, temperature))
        self._store = store
        self._default_chat_title = default_chat_title
        self._title_max_chars = title_max_chars

    async def stream(
        self,
        request: CompletionRequest,
        writer: BaseStreamWriter,
    ) -> StreamOutcome:
        """Run one completion.

        Raises:
            CompletionError: if the upstream call fails before any frame is written.
        """
        try:
            deltas = await self._client.open_stream(
                model=self._model,
                temperature=self._temperature,
                messages=request.messages,
            )
        except Exception as exc:
            await writer.fail(exc)
            raise
        Log.info("Upstream stream opened", model=self._model, chat_id=request.chat_id)

        answer = StreamedAnswer()

        async def forward(delta: str) -> None:
            await writer.write(content_frame(delta))

        try:
            await relay(deltas, forward, answer)
        except ClientDisconnectedError:
            Log.warning(
                "Client disconnected, abandoning completion stream",
                chat_id=request.chat_id,
                deltas=answer.delta_count,
            )
            await writer.close()
            return StreamOutcome(status=StreamStatus.DISCONNECTED)
        except Exception as exc:
            if answer.delta_count == 0:
                await writer.fail(exc)
                raise
            Log.error(
                f"Completion stream failed mid-stream: {exc}",
                chat_id=request.chat_id,
                deltas=answer.delta_count,
            )
            await self._finish(writer, error_frame(str(exc) or "An error occurred"))
            return StreamOutcome(status=StreamStatus.FAILED, error=str(exc))
        finally:
            await _close_quietly(deltas)

        text = answer.text
        Log.info(
            "Completion stream finished",
            chat_id=request.chat_id,
            deltas=answer.delta_count,
            chars=len(text),
        )
        persisted = await self._persist(request, text)
        await self._finish(writer, DONE_FRAME)
        return StreamOutcome(status=StreamStatus.COMPLETED, answer=text, persisted=persisted)

    async def _finish(self, writer: BaseStreamWriter, frame: str) -> None:
        try:
            await writer.write(frame)
        except ClientDisconnectedError:
            Log.warning("Client disconnected before the final frame")
        await writer.close()

    async def _persist(self, request: CompletionRequest, answer: str) -> bool:
        if not answer or request.chat_id is None or self._store is None:
            return False
        chat_id = request.chat_id
        try:
            await asyncio.to_thread(self._store.create_message, chat_id, ASSISTANT_ROLE, answer)
        except PersistenceError as exc:
            Log.error(f"Failed to persist assistant message: {exc}", chat_id=chat_id)
            return False
        Log.info("Assistant message persisted", chat_id=chat_id, chars=len(answer))

        if request.title_source:
            await self._update_title(self._store, chat_id, request.title_source)
        return True

    async def _update_title(
        self,
        store: BaseMessageStore,
        chat_id: str,
        title_source: str,
    ) -> None:
        try:
            chat = await asyncio.to_thread(store.find_chat, chat_id)
            if (
                chat is None
                or chat.title != self._default_chat_title
                or chat.assistant_message_count != 1
            ):
                return
            title = derive_title(title_source, self._title_max_chars)
            await asyncio.to_thread(store.update_chat_title, chat_id, title)
        except PersistenceError as exc:
            Log.error(f"Failed to update chat title: {exc}", chat_id=chat_id)
            return
        Log.info("Chat title updated", chat_id=chat_id, title=title)


async def _close_quietly(deltas: AsyncIterator[str]) -> None:
    aclose = getattr(deltas, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as exc:
        Log.debug(f"Ignoring error while closing upstream stream: {exc}")
