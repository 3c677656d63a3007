"""
Silent-audio TTS backend for mock mode
"""

import asyncio
from typing import List, Optional

from walkthrough.core import ProviderError

from .base import TTSBackend
from .wav import silent_wav

WORDS_PER_SECOND = 2.5
MIN_CLIP_SECONDS = 0.5


class MockTTSBackend(TTSBackend):
    """Returns 16 kHz mono silence roughly as long as the text would take to read"""

    name = "mock"
    audio_format = "wav"

    def __init__(self, delay: float = 0.0, fail_with: Optional[str] = None):
        self.delay = delay
        self.fail_with = fail_with
        self.calls: List[str] = []

    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with:
            raise ProviderError(self.fail_with, stage="voiceover")
        seconds = max(MIN_CLIP_SECONDS, len(text.split()) / WORDS_PER_SECOND)
        return silent_wav(seconds, rate=16000)
