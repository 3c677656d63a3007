"""
Base classes for AI text providers

Defines the interface shared by every text backend used for workflow
analysis, script writing and overlay suggestion.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterable, AsyncIterator, Optional, TypeVar


T = TypeVar("T")


async def iterate_with_timeout(items: AsyncIterable[T], timeout: float) -> AsyncIterator[T]:
    """Re-yield ``items``; asyncio.TimeoutError if any single item takes longer than ``timeout``"""
    iterator = items.__aiter__()
    while True:
        try:
            item = await asyncio.wait_for(iterator.__anext__(), timeout=timeout)
        except StopAsyncIteration:
            return
        yield item


class ProviderType(str, Enum):
    """Supported text providers"""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MOCK = "mock"


@dataclass
class GenerationOptions:
    """Per-call overrides; unset fields fall back to the provider config"""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    model: Optional[str] = None


class TextProvider(ABC):
    """Abstract base class for AI text providers

    ``generate_streaming_text`` yields fragments whose concatenation equals
    what ``generate_text`` returns for the same prompt. The iterator is
    finite and cannot be restarted.
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate_text(self, prompt: str, options: Optional[GenerationOptions] = None) -> str:
        """Return the full completion for ``prompt``.

        Raises:
            ProviderError: missing credentials, transport failure or empty response
            ProviderTimeoutError: no answer within the configured timeout
        """

    @abstractmethod
    def generate_streaming_text(
        self, prompt: str, options: Optional[GenerationOptions] = None
    ) -> AsyncIterator[str]:
        """Yield the completion for ``prompt`` in fragments."""

    @abstractmethod
    def is_available(self) -> bool:
        """True if the provider has what it needs to make calls"""

    @property
    def name(self) -> str:
        return self.provider_type.value
