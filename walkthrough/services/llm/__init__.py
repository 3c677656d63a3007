"""
AI text providers

Usage:
    from walkthrough.services.llm import create_text_provider

    provider = create_text_provider(load_ai_config())
    text = await provider.generate_text(prompt)
"""

from .base import GenerationOptions, ProviderType, TextProvider
from .factory import create_text_provider
from .mock_provider import MockTextProvider
from .openai_provider import OpenAIProvider
from .anthropic_provider import AnthropicProvider

__all__ = [
    "GenerationOptions",
    "ProviderType",
    "TextProvider",
    "create_text_provider",
    "MockTextProvider",
    "OpenAIProvider",
    "AnthropicProvider",
]
