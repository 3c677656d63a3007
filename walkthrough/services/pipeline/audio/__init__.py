"""
Voiceover audio - TTS backends, mixing and quality checks
"""

from dataclasses import replace

from walkthrough.config import TTSProviderType, VoiceoverConfig
from walkthrough.core import ProviderError

from .base import TTSBackend, clamp_speed
from .edge_tts_backend import EdgeTTSBackend
from .elevenlabs_tts import ElevenLabsTTSBackend
from .gemini_tts import GeminiTTSBackend
from .mock_tts import MockTTSBackend
from .openai_tts import OpenAITTSBackend
from .text_utils import sanitize_for_tts
from .voiceover_generator import QualityReport, VoiceoverGenerator, check_quality

MOCK_OUTPUT_FORMAT = "wav"


def create_tts_backend(
    config: VoiceoverConfig,
    use_mocks: bool = False,
    mock_delay: float = 0.0,
) -> TTSBackend:
    """Backend for ``config.provider``; mock mode overrides the selection"""
    if use_mocks:
        return MockTTSBackend(delay=mock_delay)

    try:
        provider = TTSProviderType(config.provider)
    except ValueError as exc:
        raise ProviderError(f"Unsupported TTS provider: {config.provider}", stage="voiceover") from exc

    if provider == TTSProviderType.OPENAI:
        return OpenAITTSBackend(config.api_key, model=config.resolved_model, timeout=config.timeout)
    if provider == TTSProviderType.ELEVENLABS:
        return ElevenLabsTTSBackend(config.api_key, model=config.resolved_model, timeout=config.timeout)
    if provider == TTSProviderType.GOOGLE:
        return GeminiTTSBackend(
            config.api_key, model=config.resolved_model, timeout=config.timeout, tone=config.tone
        )
    if provider == TTSProviderType.EDGE:
        return EdgeTTSBackend(timeout=config.timeout)
    raise ProviderError(f"Unsupported TTS provider: {config.provider}", stage="voiceover")


def create_voiceover_generator(
    config: VoiceoverConfig,
    use_mocks: bool = False,
    mock_delay: float = 0.0,
) -> VoiceoverGenerator:
    """Mock mode always encodes WAV; mp3 export would need ffmpeg."""
    if use_mocks and config.output_format != MOCK_OUTPUT_FORMAT:
        config = replace(config, output_format=MOCK_OUTPUT_FORMAT)
    return VoiceoverGenerator(config, create_tts_backend(config, use_mocks, mock_delay))


__all__ = [
    "TTSBackend",
    "clamp_speed",
    "EdgeTTSBackend",
    "ElevenLabsTTSBackend",
    "GeminiTTSBackend",
    "MockTTSBackend",
    "OpenAITTSBackend",
    "sanitize_for_tts",
    "QualityReport",
    "VoiceoverGenerator",
    "check_quality",
    "create_tts_backend",
    "create_voiceover_generator",
]
