"""
OpenAI speech backend
"""

import asyncio
from typing import Optional

import openai
from openai import AsyncOpenAI

from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import TTSBackend, clamp_speed

logger = get_logger(__name__, component="openai_tts")

DEFAULT_MODEL = "tts-1"
DEFAULT_VOICE = "alloy"


class OpenAITTSBackend(TTSBackend):
    name = "openai"
    audio_format = "mp3"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.timeout = timeout
        self._client = client
        if self._client is None and api_key:
            self.set_api_key(api_key)

    def set_api_key(self, api_key: str) -> None:
        self._client = AsyncOpenAI(api_key=api_key, timeout=self.timeout)

    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        if self._client is None:
            raise ProviderError(
                "OpenAI client not initialized. Call set_api_key() first.", stage="voiceover"
            )

        try:
            response = await asyncio.wait_for(
                self._client.audio.speech.create(
                    model=self.model,
                    voice=voice or DEFAULT_VOICE,
                    input=text,
                    speed=clamp_speed(speed),
                    response_format="mp3",
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"OpenAI TTS did not respond within {self.timeout:.0f}s", stage="voiceover"
            ) from exc
        except openai.APIError as exc:
            raise ProviderError(f"OpenAI TTS request failed: {exc}", stage="voiceover") from exc

        return response.content
