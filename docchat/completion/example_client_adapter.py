"""Example completion client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in CompletionClientFactory.
"""

from collections.abc import AsyncIterator
from typing import ClassVar

from docchat.completion.client_base import BaseCompletionClient, ChatMessage


class ExampleClientAdapter(BaseCompletionClient):
    """Example adapter that streams a fixed answer.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_DELTAS: ClassVar[tuple[str, ...]] = (
        "This is ",
        "an example ",
        "answer.",
    )

    def __init__(self, deltas: tuple[str, ...] | None = None) -> None:
        self._deltas = deltas if deltas is not None else self.DEFAULT_DELTAS

    async def open_stream(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> AsyncIterator[str]:
        _ = model, temperature, messages
        return self._stream()

    async def _stream(self) -> AsyncIterator[str]:
        for delta in self._deltas:
            yield delta
