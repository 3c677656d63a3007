"""
Anthropic text provider
"""

import asyncio
from contextlib import AsyncExitStack
from typing import AsyncIterator, Optional

import anthropic
from anthropic import AsyncAnthropic

from walkthrough.config import AIConfig, DEFAULT_TEXT_MODELS, TextProviderType
from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import GenerationOptions, ProviderType, TextProvider, iterate_with_timeout

logger = get_logger(__name__, component="anthropic_provider")

DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(TextProvider):
    """Messages API backend"""

    provider_type = ProviderType.ANTHROPIC

    def __init__(self, config: AIConfig, client: Optional[AsyncAnthropic] = None):
        if not config.api_key and client is None:
            raise ProviderError("Anthropic API key is required", stage="provider")
        self.config = config
        self.default_model = config.model or DEFAULT_TEXT_MODELS[TextProviderType.ANTHROPIC]
        self._client = client or AsyncAnthropic(api_key=config.api_key, timeout=config.timeout)

    def is_available(self) -> bool:
        return self._client is not None

    def _request_kwargs(self, prompt: str, options: Optional[GenerationOptions]) -> dict:
        options = options or GenerationOptions()
        return {
            "model": options.model or self.default_model,
            "max_tokens": options.max_tokens or self.config.max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": options.temperature if options.temperature is not None else self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def generate_text(self, prompt: str, options: Optional[GenerationOptions] = None) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.messages.create(**self._request_kwargs(prompt, options)),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Anthropic did not respond within {self.config.timeout:.0f}s", stage="provider"
            ) from exc
        except anthropic.APIError as exc:
            logger.error(f"Anthropic request failed: {exc}")
            raise ProviderError(f"Anthropic request failed: {exc}", stage="provider") from exc

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise ProviderError("Unexpected response type from Anthropic", stage="provider")
        return text

    async def generate_streaming_text(
        self, prompt: str, options: Optional[GenerationOptions] = None
    ) -> AsyncIterator[str]:
        timeout = self.config.timeout
        try:
            async with AsyncExitStack() as stack:
                stream = await asyncio.wait_for(
                    stack.enter_async_context(self._client.messages.stream(**self._request_kwargs(prompt, options))),
                    timeout=timeout,
                )
                async for text in iterate_with_timeout(stream.text_stream, timeout):
                    if text:
                        yield text
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Anthropic stream stalled for more than {timeout:.0f}s", stage="provider"
            ) from exc
        except anthropic.APIError as exc:
            raise ProviderError(f"Anthropic stream failed: {exc}", stage="provider") from exc
