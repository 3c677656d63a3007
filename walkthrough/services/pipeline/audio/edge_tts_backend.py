"""
Edge TTS backend (free, no credential)
"""

import asyncio
from typing import Optional

import edge_tts

from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import TTSBackend, clamp_speed

logger = get_logger(__name__, component="edge_tts")

DEFAULT_VOICE = "en-US-EmmaMultilingualNeural"


def speed_to_rate(speed: Optional[float]) -> str:
    """1.0 -> '+0%', 1.12 -> '+12%', 0.5 -> '-50%'"""
    percent = int(round((clamp_speed(speed) - 1.0) * 100))
    return f"{percent:+d}%"


class EdgeTTSBackend(TTSBackend):
    name = "edge"
    audio_format = "mp3"

    def __init__(self, timeout: float = 60.0):
        self.timeout = timeout

    async def _collect(self, communicate: "edge_tts.Communicate") -> bytes:
        chunks = []
        async for chunk in communicate.stream():
            if chunk.get("type") == "audio" and chunk.get("data"):
                chunks.append(chunk["data"])
        return b"".join(chunks)

    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        communicate = edge_tts.Communicate(text, voice or DEFAULT_VOICE, rate=speed_to_rate(speed))
        try:
            audio = await asyncio.wait_for(self._collect(communicate), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Edge TTS did not respond within {self.timeout:.0f}s", stage="voiceover"
            ) from exc
        except edge_tts.exceptions.EdgeTTSException as exc:
            raise ProviderError(f"Edge TTS failed: {exc}", stage="voiceover") from exc

        if not audio:
            raise ProviderError("Edge TTS returned no audio", stage="voiceover")
        return audio
