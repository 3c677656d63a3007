"""
Text provider factory

Picks the backend for an ``AIConfig``. Mock mode is an explicit argument
rather than something each provider discovers on its own.
"""

from walkthrough.config import AIConfig, TextProviderType
from walkthrough.core import ProviderError, get_logger

from .anthropic_provider import AnthropicProvider
from .base import TextProvider
from .mock_provider import MockTextProvider
from .openai_provider import OpenAIProvider

logger = get_logger(__name__, component="llm_factory")


def create_text_provider(
    config: AIConfig,
    use_mocks: bool = False,
    mock_delay: float = 0.0,
) -> TextProvider:
    """Create a text provider

    Raises:
        ProviderError: unknown provider or missing credentials
    """
    if use_mocks:
        logger.info("Using mock text provider")
        return MockTextProvider(delay=mock_delay)

    if config.provider == TextProviderType.OPENAI:
        return OpenAIProvider(config)
    if config.provider == TextProviderType.ANTHROPIC:
        return AnthropicProvider(config)

    raise ProviderError(f"Unsupported AI provider: {config.provider}", stage="provider")
