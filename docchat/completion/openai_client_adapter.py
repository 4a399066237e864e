from collections.abc import AsyncIterator
from typing import Any

import httpx
import openai

from docchat.completion.client_base import BaseCompletionClient, ChatMessage
from docchat.completion.exceptions import UpstreamSetupError, UpstreamStreamError


class OpenAIClientAdapter(BaseCompletionClient):
    """Streaming completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def open_stream(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> AsyncIterator[str]:
        try:
            stream = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,  # type: ignore[arg-type]
                stream=True,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise UpstreamSetupError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise UpstreamSetupError(f"AI provider API error: {exc}") from exc
        return self._deltas(stream)

    @staticmethod
    async def _deltas(stream: Any) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except (openai.APIError, httpx.HTTPError) as exc:
            raise UpstreamStreamError(f"AI provider stream error: {exc}") from exc
        finally:
            await stream.close()
