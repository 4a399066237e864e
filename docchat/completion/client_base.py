from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

ChatMessage = dict[str, object]


class BaseCompletionClient(ABC):
    """Contract for provider-specific streaming completion clients."""

    @abstractmethod
    async def open_stream(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> AsyncIterator[str]:
        """Submit role-tagged messages and return the stream of text deltas.

        Raises:
            UpstreamSetupError: if the request fails before any delta exists.

        The returned iterator yields non-empty text fragments and raises
        UpstreamStreamError if the provider fails mid-stream.
        """
