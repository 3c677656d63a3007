"""
ElevenLabs speech backend over plain HTTP
"""

from typing import Optional

import httpx

from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import TTSBackend, clamp_speed

logger = get_logger(__name__, component="elevenlabs_tts")

API_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
DEFAULT_MODEL = "eleven_monolingual_v1"
DEFAULT_VOICE = "21m00Tcm4TlvDq8ikWAM"


class ElevenLabsTTSBackend(TTSBackend):
    name = "elevenlabs"
    audio_format = "mp3"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        stability: float = 0.5,
        similarity_boost: float = 0.75,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.stability = stability
        self.similarity_boost = similarity_boost
        self._transport = transport

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key

    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        if not self.api_key:
            raise ProviderError(
                "ElevenLabs API key not found. Set ELEVENLABS_API_KEY environment variable.",
                stage="voiceover",
            )

        payload = {
            "text": text,
            "model_id": self.model,
            "voice_settings": {
                "stability": self.stability,
                "similarity_boost": self.similarity_boost,
                "speed": clamp_speed(speed),
            },
        }
        headers = {
            "xi-api-key": self.api_key,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    API_URL.format(voice_id=voice or DEFAULT_VOICE),
                    json=payload,
                    headers=headers,
                )
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(
                f"ElevenLabs did not respond within {self.timeout:.0f}s", stage="voiceover"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"ElevenLabs API error: {exc.response.status_code} {exc.response.text[:200]}",
                stage="voiceover",
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"ElevenLabs request failed: {exc}", stage="voiceover") from exc

        return response.content
