"""
Video assembly - overlays, media commands and composition
"""

from walkthrough.config import VideoConfig

from .composition import CompositionEngine, CompositionState
from .executor import FFmpegExecutor, VideoCommandExecutor
from .mock_executor import MockVideoCommandExecutor
from .overlays import OverlayGenerator, generate_basic_overlays
from .validation import assert_valid_overlay, normalize_overlay


def create_video_executor(config: VideoConfig | None = None, use_mocks: bool = False) -> VideoCommandExecutor:
    if use_mocks:
        return MockVideoCommandExecutor(config)
    return FFmpegExecutor(config)


__all__ = [
    "CompositionEngine",
    "CompositionState",
    "FFmpegExecutor",
    "VideoCommandExecutor",
    "MockVideoCommandExecutor",
    "OverlayGenerator",
    "generate_basic_overlays",
    "assert_valid_overlay",
    "normalize_overlay",
    "create_video_executor",
]
