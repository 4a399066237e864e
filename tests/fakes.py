"""In-memory stand-ins for the completion provider and the client connection."""

from collections.abc import AsyncIterator

from docchat.completion.client_base import BaseCompletionClient, ChatMessage
from docchat.completion.exceptions import UpstreamSetupError, UpstreamStreamError
from docchat.streaming.writers import BaseStreamWriter, ClientDisconnectedError


class FakeCompletionClient(BaseCompletionClient):
    def __init__(
        self,
        deltas: list[str],
        *,
        fail_at: int | None = None,
        setup_error: str | None = None,
    ) -> None:
        self.deltas = deltas
        self.fail_at = fail_at
        self.setup_error = setup_error
        self.calls: list[dict[str, object]] = []
        self.pulled = 0
        self.closed = False

    async def open_stream(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> AsyncIterator[str]:
        self.calls.append({"model": model, "temperature": temperature, "messages": messages})
        if self.setup_error is not None:
            raise UpstreamSetupError(self.setup_error)
        return self._stream()

    async def _stream(self) -> AsyncIterator[str]:
        try:
            for index, delta in enumerate(self.deltas):
                if index == self.fail_at:
                    raise UpstreamStreamError("upstream dropped the connection")
                self.pulled += 1
                yield delta
            if self.fail_at == len(self.deltas):
                raise UpstreamStreamError("upstream dropped the connection")
        finally:
            self.closed = True


class RecordingWriter(BaseStreamWriter):
    def __init__(self, disconnect_after: int | None = None) -> None:
        self.frames: list[str] = []
        self.closed = False
        self.disconnect_after = disconnect_after

    async def write(self, frame: str) -> None:
        if self.disconnect_after is not None and len(self.frames) >= self.disconnect_after:
            raise ClientDisconnectedError("client went away")
        self.frames.append(frame)

    async def close(self) -> None:
        self.closed = True
