"""
Deterministic text provider for mock mode

Returns canned JSON for the three prompt kinds the pipeline sends, keyed by
the task title each prompt template carries.
"""

import asyncio
import json
import re
from typing import AsyncIterator, List, Optional, Tuple

from walkthrough.core import ProviderError, get_logger
from walkthrough.testing import SAMPLE_ANALYSIS, SAMPLE_OVERLAYS, SAMPLE_SCRIPT

from .base import GenerationOptions, ProviderType, TextProvider

logger = get_logger(__name__, component="mock_provider")

_FRAGMENT_RE = re.compile(r"\S+\s*|\s+")


def _fenced(payload) -> str:
    return "```json\n" + json.dumps(payload, indent=2) + "\n```"


# Checked in order; the first marker found in the lowercased prompt wins.
CANNED_RESPONSES: List[Tuple[str, str]] = [
    ("video editing", _fenced(SAMPLE_OVERLAYS)),
    ("script generation", _fenced(SAMPLE_SCRIPT)),
    ("workflow analysis", _fenced(SAMPLE_ANALYSIS)),
]


class MockTextProvider(TextProvider):
    """Zero-cost stand-in for the real text providers

    Args:
        delay: simulated latency in seconds
        responses: optional prompt-marker/response overrides checked before
            the canned ones
        fail_with: if set, every call raises ``ProviderError`` with this message
    """

    provider_type = ProviderType.MOCK

    def __init__(
        self,
        delay: float = 0.0,
        responses: Optional[List[Tuple[str, str]]] = None,
        fail_with: Optional[str] = None,
    ):
        self.delay = delay
        self.responses = list(responses or []) + CANNED_RESPONSES
        self.fail_with = fail_with
        self.prompts: List[str] = []

    def is_available(self) -> bool:
        return True

    def respond(self, prompt: str) -> str:
        lowered = prompt.lower()
        for marker, response in self.responses:
            if marker in lowered:
                return response
        return json.dumps({"result": "Mock AI response", "prompt": prompt[:100]})

    async def generate_text(self, prompt: str, options: Optional[GenerationOptions] = None) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with:
            raise ProviderError(self.fail_with, stage="provider")
        return self.respond(prompt)

    async def generate_streaming_text(
        self, prompt: str, options: Optional[GenerationOptions] = None
    ) -> AsyncIterator[str]:
        text = await self.generate_text(prompt, options)
        for fragment in _FRAGMENT_RE.findall(text):
            yield fragment
