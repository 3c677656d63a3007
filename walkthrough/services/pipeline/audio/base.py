"""
TTS backend interface
"""

from abc import ABC, abstractmethod
from typing import Optional

MIN_SPEED = 0.25
MAX_SPEED = 4.0


def clamp_speed(speed: Optional[float]) -> float:
    if speed is None:
        return 1.0
    return max(MIN_SPEED, min(float(speed), MAX_SPEED))


class TTSBackend(ABC):
    """Turns sanitized text into encoded audio bytes"""

    name: str = "tts"
    # Container of the bytes ``synthesize`` returns ("mp3" or "wav")
    audio_format: str = "mp3"

    @abstractmethod
    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        """Synthesize ``text``.

        Raises:
            ProviderError: missing credential or transport failure
            ProviderTimeoutError: no response within the backend timeout
        """

    def set_api_key(self, api_key: str) -> None:
        """Install a credential after construction. No-op for keyless backends."""
