import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import TextIO


class ClientDisconnectedError(Exception):
    """Raised by a writer once the client connection is gone."""


class BaseStreamWriter(ABC):
    """Push side of the long-lived client connection."""

    @abstractmethod
    async def write(self, frame: str) -> None:
        """Deliver one frame and flush it.

        Raises:
            ClientDisconnectedError: if the client is no longer connected.
        """

    @abstractmethod
    async def close(self) -> None:
        """End the stream. Safe to call more than once."""

    async def fail(self, exc: Exception) -> None:
        """End the stream because the request failed before streaming began.

        The caller still raises ``exc``; writers that own the response body
        hand it to the consumer so a structured error can be sent instead.
        """
        await self.close()


class TextStreamWriter(BaseStreamWriter):
    """Writes frames to a text stream such as stdout."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._closed = False

    async def write(self, frame: str) -> None:
        if self._closed:
            raise ClientDisconnectedError("stream already closed")
        try:
            self._stream.write(frame)
            self._stream.flush()
        except (BrokenPipeError, ValueError) as exc:
            self._closed = True
            raise ClientDisconnectedError(str(exc)) from exc

    async def close(self) -> None:
        self._closed = True


class QueueStreamWriter(BaseStreamWriter):
    """Hands frames to an HTTP response body through a single-slot queue.

    ``frames()`` is the async iterator a streaming response consumes. The
    single slot means the next upstream delta is not pulled until the previous
    frame was taken by the transport. The HTTP layer calls ``disconnect()``
    when it detects the client went away.

    If the request fails before the first frame, ``frames()`` raises that
    error instead of yielding, so the HTTP layer can still answer with a
    regular error response.
    """

    _END = None

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=1)
        self._disconnected = False
        self._closed = False
        self._error: Exception | None = None

    async def write(self, frame: str) -> None:
        if self._disconnected or self._closed:
            raise ClientDisconnectedError("client disconnected")
        await self._queue.put(frame)
        # disconnect() may have freed the slot this put was waiting on.
        if self._disconnected:
            raise ClientDisconnectedError("client disconnected")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._disconnected:
            await self._queue.put(self._END)

    async def fail(self, exc: Exception) -> None:
        if self._closed:
            return
        self._error = exc
        await self.close()

    def disconnect(self) -> None:
        self._disconnected = True
        while not self._queue.empty():
            self._queue.get_nowait()

    async def frames(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is self._END:
                if self._error is not None:
                    raise self._error
                return
            yield frame
