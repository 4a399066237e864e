from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field


@dataclass
class StreamedAnswer:
    """Deltas received so far for one completion."""

    parts: list[str] = field(default_factory=list)

    def append(self, delta: str) -> None:
        self.parts.append(delta)

    @property
    def delta_count(self) -> int:
        return len(self.parts)

    @property
    def text(self) -> str:
        return "".join(self.parts)


async def relay(
    deltas: AsyncIterator[str],
    forward: Callable[[str], Awaitable[None]],
    answer: StreamedAnswer | None = None,
) -> StreamedAnswer:
    """Forward every delta and accumulate it, one delta at a time.

    A delta is forwarded before the next one is requested and is only
    accumulated once forwarding succeeded.
    """
    if answer is None:
        answer = StreamedAnswer()
    async for delta in deltas:
        await forward(delta)
        answer.append(delta)
    return answer
