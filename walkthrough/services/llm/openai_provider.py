"""
OpenAI text provider

Wraps the async OpenAI SDK client for chat completions.
"""

import asyncio
from typing import AsyncIterator, Optional

import openai
from openai import AsyncOpenAI

from walkthrough.config import AIConfig, DEFAULT_TEXT_MODELS, TextProviderType
from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import GenerationOptions, ProviderType, TextProvider, iterate_with_timeout

logger = get_logger(__name__, component="openai_provider")


class OpenAIProvider(TextProvider):
    """Chat-completions backend"""

    provider_type = ProviderType.OPENAI

    def __init__(self, config: AIConfig, client: Optional[AsyncOpenAI] = None):
        if not config.api_key and client is None:
            raise ProviderError("OpenAI API key is required", stage="provider")
        self.config = config
        self.default_model = config.model or DEFAULT_TEXT_MODELS[TextProviderType.OPENAI]
        self._client = client or AsyncOpenAI(api_key=config.api_key, timeout=config.timeout)

    def is_available(self) -> bool:
        return self._client is not None

    def _request_kwargs(self, prompt: str, options: Optional[GenerationOptions]) -> dict:
        options = options or GenerationOptions()
        kwargs = {
            "model": options.model or self.default_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature if options.temperature is not None else self.config.temperature,
        }
        max_tokens = options.max_tokens or self.config.max_tokens
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        return kwargs

    async def generate_text(self, prompt: str, options: Optional[GenerationOptions] = None) -> str:
        kwargs = self._request_kwargs(prompt, options)
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(**kwargs),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"OpenAI did not respond within {self.config.timeout:.0f}s", stage="provider"
            ) from exc
        except openai.APIError as exc:
            logger.error(f"OpenAI request failed: {exc}")
            raise ProviderError(f"OpenAI request failed: {exc}", stage="provider") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderError("No response from OpenAI", stage="provider")
        return content

    async def generate_streaming_text(
        self, prompt: str, options: Optional[GenerationOptions] = None
    ) -> AsyncIterator[str]:
        kwargs = self._request_kwargs(prompt, options)
        try:
            stream = await asyncio.wait_for(
                self._client.chat.completions.create(stream=True, **kwargs),
                timeout=self.config.timeout,
            )
            async for chunk in iterate_with_timeout(stream, self.config.timeout):
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"OpenAI did not respond within {self.config.timeout:.0f}s", stage="provider"
            ) from exc
        except openai.APIError as exc:
            raise ProviderError(f"OpenAI stream failed: {exc}", stage="provider") from exc
