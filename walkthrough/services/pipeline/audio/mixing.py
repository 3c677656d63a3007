"""
Single-track alignment of per-segment clips

Each clip is placed at its segment's start time on one track. Gaps are
filled with silence; a clip that runs past the next start pushes every
later clip back so nothing overlaps or gets cut.
"""

import io
from dataclasses import dataclass
from typing import List, Sequence

from pydub import AudioSegment

from walkthrough.core import get_logger

logger = get_logger(__name__, component="audio_mixing")


@dataclass
class TimedClip:
    start_time: float  # seconds
    audio: bytes
    audio_format: str = "mp3"


def decode_clip(clip: TimedClip) -> AudioSegment:
    return AudioSegment.from_file(io.BytesIO(clip.audio), format=clip.audio_format)


def align_clips(clips: Sequence[TimedClip]) -> AudioSegment:
    """Lay clips on one track at their start times"""
    track = AudioSegment.empty()
    shifted: List[float] = []

    for clip in sorted(clips, key=lambda c: c.start_time):
        audio = decode_clip(clip)
        target_ms = int(round(max(0.0, clip.start_time) * 1000))
        cursor_ms = len(track)
        if target_ms > cursor_ms:
            track += AudioSegment.silent(duration=target_ms - cursor_ms, frame_rate=audio.frame_rate)
        elif target_ms < cursor_ms:
            shifted.append(clip.start_time)
        track += audio

    if shifted:
        logger.info(
            f"{len(shifted)} clip(s) started late because the previous clip overran",
            extra={"requested_starts": shifted},
        )
    return track


def export_track(track: AudioSegment, audio_format: str = "mp3") -> bytes:
    buffer = io.BytesIO()
    track.export(buffer, format=audio_format)
    return buffer.getvalue()


def combine_clips(clips: Sequence[TimedClip], audio_format: str = "mp3") -> bytes:
    """Aligned track encoded as ``audio_format``; no clips gives ``b""``."""
    if not clips:
        return b""
    return export_track(align_clips(clips), audio_format)
