"""
Configuration package

Loads a ``.env`` file (if present) on import so the ``load_*`` helpers see
credentials kept out of the shell environment.
"""

from dotenv import load_dotenv

load_dotenv()

from .models import (  # noqa: E402
    AIConfig,
    VoiceoverConfig,
    VideoConfig,
    PipelineSettings,
    TextProviderType,
    TTSProviderType,
    VideoFormat,
    DEFAULT_TEXT_MODELS,
    DEFAULT_VOICES,
    DEFAULT_TTS_MODELS,
    load_ai_config,
    load_voiceover_config,
    load_video_config,
    load_pipeline_settings,
)

__all__ = [
    "AIConfig",
    "VoiceoverConfig",
    "VideoConfig",
    "PipelineSettings",
    "TextProviderType",
    "TTSProviderType",
    "VideoFormat",
    "DEFAULT_TEXT_MODELS",
    "DEFAULT_VOICES",
    "DEFAULT_TTS_MODELS",
    "load_ai_config",
    "load_voiceover_config",
    "load_video_config",
    "load_pipeline_settings",
]
