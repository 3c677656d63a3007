"""
Google speech backend using Gemini native TTS

The API returns raw PCM (24 kHz, 16-bit, mono); it is wrapped in a WAV
container before being handed back.
"""

import asyncio
import base64
import binascii
from typing import Optional

from walkthrough.core import ProviderError, ProviderTimeoutError, get_logger

from .base import TTSBackend
from .wav import pcm_to_wav

logger = get_logger(__name__, component="gemini_tts")

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_GEMINI_VOICE = "Charon"

GEMINI_VOICES = {
    "Zephyr": "Bright",
    "Puck": "Upbeat",
    "Charon": "Informative",
    "Kore": "Firm",
    "Fenrir": "Excitable",
    "Aoede": "Breezy",
    "Iapetus": "Clear",
    "Algieba": "Smooth",
    "Achird": "Friendly",
    "Sulafat": "Warm",
}


class GeminiTTSBackend(TTSBackend):
    """Gemini TTS. Speaking rate is fixed by the model; ``speed`` is ignored.

    ``tone`` (e.g. "friendly") is prepended to the text as a delivery instruction.
    """

    name = "google"
    audio_format = "wav"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = 60.0,
        tone: Optional[str] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.tone = tone
        self._client = None

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise ProviderError(
                    "Google TTS API key not found. Set GEMINI_API_KEY environment variable.",
                    stage="voiceover",
                )
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _styled(self, text: str) -> str:
        # Gemini TTS takes delivery instructions as natural language in the prompt
        if not self.tone:
            return text
        return f"Say in a {self.tone} tone: {text}"

    async def synthesize(self, text: str, voice: str, speed: float = 1.0) -> bytes:
        from google.genai import types

        client = self._get_client()
        if voice not in GEMINI_VOICES:
            logger.warning(f"Unknown Gemini voice '{voice}', falling back to {DEFAULT_GEMINI_VOICE}")
            voice = DEFAULT_GEMINI_VOICE

        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
                )
            ),
        )

        # The SDK call is blocking; run it off the event loop.
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    client.models.generate_content,
                    model=self.model,
                    contents=self._styled(text),
                    config=config,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Gemini TTS did not respond within {self.timeout:.0f}s", stage="voiceover"
            ) from exc
        except Exception as exc:
            raise ProviderError(f"Gemini TTS request failed: {exc}", stage="voiceover") from exc

        return pcm_to_wav(extract_inline_audio(response))


def extract_inline_audio(response) -> bytes:
    """First inline audio payload of a generate_content response"""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if isinstance(data, bytes) and data:
                return data
            if isinstance(data, str) and data:
                try:
                    return base64.b64decode(data)
                except binascii.Error as exc:
                    raise ProviderError("Unable to decode Gemini audio payload", stage="voiceover") from exc
    raise ProviderError("Gemini TTS returned no audio", stage="voiceover")
