"""
Voiceover generator

Synthesizes every script segment through the configured TTS backend and
lays the clips on a single track aligned to the segment start times.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from walkthrough.config import VoiceoverConfig
from walkthrough.core import LogTimer, get_logger
from walkthrough.models import ScriptSegment

from .base import TTSBackend, clamp_speed
from .mixing import TimedClip, combine_clips
from .text_utils import sanitize_for_tts

logger = get_logger(__name__, component="voiceover")

# Quality heuristics assume 16 kHz single-byte-per-sample equivalence
BYTES_PER_SECOND_ESTIMATE = 16000
MIN_SEGMENT_SECONDS = 0.5
MAX_SEGMENT_SECONDS = 30.0
SHORT_PENALTY = 20
LONG_PENALTY = 10

DEFAULT_MIN_SCORE = 70
MAX_ATTEMPTS = 3


@dataclass
class QualityReport:
    score: int
    issues: List[str] = field(default_factory=list)

    def passes(self, min_score: int) -> bool:
        return self.score >= min_score


def check_quality(audio: bytes) -> QualityReport:
    """Cheap size-based sanity check of a synthesized buffer"""
    if not audio:
        return QualityReport(score=0, issues=["Empty audio buffer"])

    score = 100
    issues: List[str] = []
    estimated_seconds = len(audio) / BYTES_PER_SECOND_ESTIMATE

    if estimated_seconds < MIN_SEGMENT_SECONDS:
        issues.append("Audio segment too short")
        score -= SHORT_PENALTY
    if estimated_seconds > MAX_SEGMENT_SECONDS:
        issues.append("Audio segment too long (may need splitting)")
        score -= LONG_PENALTY

    return QualityReport(score=max(0, score), issues=issues)


class VoiceoverGenerator:
    """Script segments -> one encoded voiceover track"""

    def __init__(self, config: VoiceoverConfig, backend: TTSBackend):
        self.config = config
        self.backend = backend

    @property
    def voice(self) -> str:
        return self.config.resolved_voice

    def set_api_key(self, api_key: str) -> None:
        self.backend.set_api_key(api_key)

    async def generate_segment(self, segment: ScriptSegment) -> bytes:
        """Synthesize one segment's sanitized text.

        Raises:
            ProviderError: from the backend (missing credential, transport failure)
        """
        text = sanitize_for_tts(segment.text)
        if not text:
            logger.warning(f"Segment at {segment.start_time:.2f}s has no speakable text")
            return b""
        return await self.backend.synthesize(text, self.voice, clamp_speed(self.config.speed))

    async def generate_voiceover(self, segments: Sequence[ScriptSegment]) -> bytes:
        """Synthesize all segments and align them on one track"""
        if not segments:
            return b""

        with LogTimer(logger, f"voiceover for {len(segments)} segment(s)"):
            clips = []
            for segment in segments:
                audio = await self.generate_segment(segment)
                if audio:
                    clips.append(TimedClip(segment.start_time, audio, self.backend.audio_format))
            return combine_clips(clips, self.config.output_format)

    def check_quality(self, audio: bytes) -> QualityReport:
        return check_quality(audio)

    async def generate_voiceover_with_retry(
        self,
        segments: Sequence[ScriptSegment],
        min_score: int = DEFAULT_MIN_SCORE,
    ) -> bytes:
        """Regenerate up to three times until the track scores ``min_score``.

        The last attempt is returned when none qualifies.
        """
        audio = b""
        for attempt in range(1, MAX_ATTEMPTS + 1):
            audio = await self.generate_voiceover(segments)
            report = self.check_quality(audio)
            if report.passes(min_score):
                return audio
            logger.warning(
                f"Voiceover attempt {attempt}/{MAX_ATTEMPTS} scored {report.score}",
                extra={"issues": report.issues},
            )
        return audio
