"""
Video command executors

``VideoCommandExecutor`` is the boundary between the composition engine and
the media tool. ``FFmpegExecutor`` runs real commands; the mock in
``mock_executor`` records them instead.
"""

import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from walkthrough.config import VideoConfig
from walkthrough.core import NotFoundError, get_logger
from walkthrough.models import TextOverlay

from .ffmpeg import (
    build_mux_cmd,
    build_overlay_cmd,
    build_resize_cmd,
    build_transition_cmd,
    probe_duration,
    run_ffmpeg,
)
from .validation import assert_valid_overlay

logger = get_logger(__name__, component="video_executor")


def require_file(path: str, stage: str) -> None:
    if not os.path.exists(path):
        raise NotFoundError(f"Input file not found: {path}", stage=stage)


class VideoCommandExecutor(ABC):
    """Declarative video operations. Every method writes ``output_path`` or raises."""

    def __init__(self, config: Optional[VideoConfig] = None):
        self.config = config or VideoConfig()

    @abstractmethod
    async def add_text_overlays(
        self, video_path: str, overlays: Sequence[TextOverlay], output_path: str
    ) -> None:
        """Burn overlays, each visible on ``[start_time, end_time)``.

        Raises:
            ValidationError: an overlay breaks an invariant
            ExecutionError: the command failed
        """

    async def add_text_overlay(self, video_path: str, overlay: TextOverlay, output_path: str) -> None:
        await self.add_text_overlays(video_path, [overlay], output_path)

    @abstractmethod
    async def add_audio_track(self, video_path: str, audio_path: str, output_path: str) -> None:
        """Mux audio in; the shorter stream sets the output length."""

    @abstractmethod
    async def apply_transitions(
        self, video_path: str, transitions: Sequence[Dict], output_path: str
    ) -> None:
        """Apply ``fadeIn``/``fadeOut`` transitions."""

    @abstractmethod
    async def get_video_duration(self, video_path: str) -> float:
        """Duration in seconds."""

    @abstractmethod
    async def resize_video(self, video_path: str, output_path: str) -> None:
        """Scale to the configured size and frame rate."""

    @staticmethod
    def validate_overlays(overlays: Sequence[TextOverlay]) -> None:
        for overlay in overlays:
            assert_valid_overlay(overlay)


class FFmpegExecutor(VideoCommandExecutor):
    """Runs ffmpeg/ffprobe as subprocesses"""

    @property
    def timeout(self) -> float:
        return self.config.ffmpeg_timeout

    async def add_text_overlays(
        self, video_path: str, overlays: Sequence[TextOverlay], output_path: str
    ) -> None:
        self.validate_overlays(overlays)
        require_file(video_path, "overlay")
        logger.info(f"Burning {len(overlays)} overlay(s) into {os.path.basename(video_path)}")
        await run_ffmpeg(
            build_overlay_cmd(video_path, overlays, output_path, self.config),
            stage="overlay",
            timeout=self.timeout,
        )

    async def add_audio_track(self, video_path: str, audio_path: str, output_path: str) -> None:
        require_file(video_path, "mux")
        require_file(audio_path, "mux")
        await run_ffmpeg(
            build_mux_cmd(video_path, audio_path, output_path, self.config),
            stage="mux",
            timeout=self.timeout,
        )

    async def apply_transitions(
        self, video_path: str, transitions: Sequence[Dict], output_path: str
    ) -> None:
        require_file(video_path, "transitions")
        await run_ffmpeg(
            build_transition_cmd(video_path, transitions, output_path, self.config),
            stage="transitions",
            timeout=self.timeout,
        )

    async def get_video_duration(self, video_path: str) -> float:
        require_file(video_path, "probe")
        return await probe_duration(video_path)

    async def resize_video(self, video_path: str, output_path: str) -> None:
        require_file(video_path, "resize")
        await run_ffmpeg(
            build_resize_cmd(video_path, output_path, self.config),
            stage="resize",
            timeout=self.timeout,
        )
