"""
Run configuration for the walkthrough pipeline

Every config object is a frozen dataclass so a single instance can be
shared by concurrent pipeline runs. Environment variables are read only by
the ``load_*`` helpers in this module; everything downstream receives
explicit values.

=== ENVIRONMENT ===

    AI_PROVIDER         openai | anthropic (default: openai)
    AI_MODEL            overrides the provider default model
    OPENAI_API_KEY      used by the OpenAI text provider and OpenAI TTS
    ANTHROPIC_API_KEY   used by the Anthropic text provider
    TTS_PROVIDER        openai | elevenlabs | google | edge (default: openai)
    TTS_VOICE, TTS_SPEED, TTS_FORMAT
    TTS_TONE            delivery style for backends that accept one (google)
    ELEVENLABS_API_KEY  used by the ElevenLabs backend
    GEMINI_API_KEY      used by the Google backend
    PROVIDER_TIMEOUT    seconds before an AI/TTS call is abandoned (default: 60)
    FFMPEG_TIMEOUT      seconds before a media command is killed (default: 600)
    USE_MOCKS           replace every external call with deterministic stand-ins
    MOCK_DELAY          simulated latency of mock providers in milliseconds
    WORK_DIR            directory for temporary artifacts
    LOG_LEVEL, LOG_JSON, LOG_FILE
"""

import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from walkthrough.core.runtime import parse_bool_env, parse_float_env


class TextProviderType(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class TTSProviderType(str, Enum):
    OPENAI = "openai"
    ELEVENLABS = "elevenlabs"
    GOOGLE = "google"
    EDGE = "edge"


class VideoFormat(str, Enum):
    MP4 = "mp4"
    WEBM = "webm"


DEFAULT_TEXT_MODELS = {
    TextProviderType.OPENAI: "gpt-4-turbo-preview",
    TextProviderType.ANTHROPIC: "claude-3-opus-20240229",
}

DEFAULT_VOICES = {
    TTSProviderType.OPENAI: "alloy",
    TTSProviderType.ELEVENLABS: "21m00Tcm4TlvDq8ikWAM",
    TTSProviderType.GOOGLE: "Charon",
    TTSProviderType.EDGE: "en-US-EmmaMultilingualNeural",
}

DEFAULT_TTS_MODELS = {
    TTSProviderType.OPENAI: "tts-1",
    TTSProviderType.ELEVENLABS: "eleven_monolingual_v1",
    TTSProviderType.GOOGLE: "gemini-2.5-flash-preview-tts",
}

DEFAULT_PROVIDER_TIMEOUT = 60.0
DEFAULT_FFMPEG_TIMEOUT = 600.0


@dataclass(frozen=True)
class AIConfig:
    """Text provider selection and credentials"""
    provider: TextProviderType = TextProviderType.OPENAI
    api_key: Optional[str] = None
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    timeout: float = DEFAULT_PROVIDER_TIMEOUT

    @property
    def resolved_model(self) -> str:
        return self.model or DEFAULT_TEXT_MODELS[self.provider]


@dataclass(frozen=True)
class VoiceoverConfig:
    """TTS backend selection and voice parameters"""
    provider: TTSProviderType = TTSProviderType.OPENAI
    voice: Optional[str] = None
    speed: float = 1.0
    tone: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    output_format: str = "mp3"  # "mp3" or "wav"
    timeout: float = DEFAULT_PROVIDER_TIMEOUT

    @property
    def resolved_voice(self) -> str:
        return self.voice or DEFAULT_VOICES[self.provider]

    @property
    def resolved_model(self) -> Optional[str]:
        return self.model or DEFAULT_TTS_MODELS.get(self.provider)


@dataclass(frozen=True)
class VideoConfig:
    width: int = 1920
    height: int = 1080
    fps: int = 30
    format: VideoFormat = VideoFormat.MP4
    ffmpeg_timeout: float = DEFAULT_FFMPEG_TIMEOUT

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class PipelineSettings:
    """Process-level switches"""
    use_mocks: bool = False
    mock_delay: float = 0.0  # seconds
    work_dir: Path = Path(tempfile.gettempdir()) / "walkthrough"
    log_level: str = "INFO"
    use_json_logs: bool = False
    log_file: Optional[Path] = None


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def load_ai_config(environ: Optional[Mapping[str, str]] = None) -> AIConfig:
    env = _env(environ)
    provider = TextProviderType(env.get("AI_PROVIDER", TextProviderType.OPENAI.value).strip().lower())
    key_var = "ANTHROPIC_API_KEY" if provider == TextProviderType.ANTHROPIC else "OPENAI_API_KEY"
    return AIConfig(
        provider=provider,
        api_key=env.get(key_var) or None,
        model=env.get("AI_MODEL") or None,
        timeout=parse_float_env(env.get("PROVIDER_TIMEOUT"), DEFAULT_PROVIDER_TIMEOUT),
    )


_TTS_KEY_VARS = {
    TTSProviderType.OPENAI: "OPENAI_API_KEY",
    TTSProviderType.ELEVENLABS: "ELEVENLABS_API_KEY",
    TTSProviderType.GOOGLE: "GEMINI_API_KEY",
}


def load_voiceover_config(environ: Optional[Mapping[str, str]] = None) -> VoiceoverConfig:
    env = _env(environ)
    provider = TTSProviderType(env.get("TTS_PROVIDER", TTSProviderType.OPENAI.value).strip().lower())
    key_var = _TTS_KEY_VARS.get(provider)
    return VoiceoverConfig(
        provider=provider,
        voice=env.get("TTS_VOICE") or None,
        speed=parse_float_env(env.get("TTS_SPEED"), 1.0),
        tone=env.get("TTS_TONE") or None,
        api_key=(env.get(key_var) or None) if key_var else None,
        output_format=(env.get("TTS_FORMAT") or "mp3").lower(),
        timeout=parse_float_env(env.get("PROVIDER_TIMEOUT"), DEFAULT_PROVIDER_TIMEOUT),
    )


def load_video_config(environ: Optional[Mapping[str, str]] = None) -> VideoConfig:
    env = _env(environ)
    return VideoConfig(
        width=int(env.get("VIDEO_WIDTH", "1920")),
        height=int(env.get("VIDEO_HEIGHT", "1080")),
        fps=int(env.get("VIDEO_FPS", "30")),
        format=VideoFormat(env.get("VIDEO_FORMAT", "mp4").lower()),
        ffmpeg_timeout=parse_float_env(env.get("FFMPEG_TIMEOUT"), DEFAULT_FFMPEG_TIMEOUT),
    )


def load_pipeline_settings(environ: Optional[Mapping[str, str]] = None) -> PipelineSettings:
    env = _env(environ)
    work_dir = env.get("WORK_DIR")
    log_file = env.get("LOG_FILE")
    return PipelineSettings(
        use_mocks=parse_bool_env(env.get("USE_MOCKS")),
        mock_delay=parse_float_env(env.get("MOCK_DELAY"), 0.0) / 1000.0,
        work_dir=Path(work_dir) if work_dir else PipelineSettings.work_dir,
        log_level=env.get("LOG_LEVEL", "INFO"),
        use_json_logs=parse_bool_env(env.get("LOG_JSON")),
        log_file=Path(log_file) if log_file else None,
    )
