"""
Recording executor for mock mode and tests
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from walkthrough.config import VideoConfig
from walkthrough.core import ExecutionError
from walkthrough.models import TextOverlay

from .ffmpeg import build_mux_cmd, build_overlay_cmd, build_resize_cmd, build_transition_cmd
from .executor import VideoCommandExecutor, require_file

MOCK_VIDEO_DURATION = 15.5
PLACEHOLDER_BYTES = b"mock video output"
DEFAULT_FAILURE = "Mock FFmpeg error"


@dataclass
class RecordedCommand:
    operation: str
    args: Dict[str, Any]
    argv: List[str] = field(default_factory=list)


class MockVideoCommandExecutor(VideoCommandExecutor):
    """Builds the same commands as ``FFmpegExecutor`` but only records them.

    Outputs are placeholder files so later stages find their inputs.
    """

    def __init__(self, config: Optional[VideoConfig] = None):
        super().__init__(config)
        self.commands: List[RecordedCommand] = []
        self.fail_reason: Optional[str] = None
        self.fail_on: Optional[str] = None

    def set_should_fail(self, reason: Optional[str] = DEFAULT_FAILURE, operation: Optional[str] = None) -> None:
        """Fail every call (or only ``operation``) with ``reason``; None clears it"""
        self.fail_reason = reason
        self.fail_on = operation

    def clear(self) -> None:
        self.commands.clear()

    def operations(self) -> List[str]:
        return [command.operation for command in self.commands]

    def _record(self, operation: str, args: Dict[str, Any], argv: List[str], output_path: Optional[str]) -> None:
        self.commands.append(RecordedCommand(operation, args, argv))
        if self.fail_reason and self.fail_on in (None, operation):
            raise ExecutionError(self.fail_reason, stage=operation)
        if output_path:
            Path(output_path).write_bytes(PLACEHOLDER_BYTES)

    async def add_text_overlays(
        self, video_path: str, overlays: Sequence[TextOverlay], output_path: str
    ) -> None:
        self.validate_overlays(overlays)
        require_file(video_path, "overlay")
        self._record(
            "overlay",
            {"video": video_path, "overlays": list(overlays), "output": output_path},
            build_overlay_cmd(video_path, overlays, output_path, self.config),
            output_path,
        )

    async def add_audio_track(self, video_path: str, audio_path: str, output_path: str) -> None:
        require_file(video_path, "mux")
        require_file(audio_path, "mux")
        self._record(
            "mux",
            {"video": video_path, "audio": audio_path, "output": output_path},
            build_mux_cmd(video_path, audio_path, output_path, self.config),
            output_path,
        )

    async def apply_transitions(
        self, video_path: str, transitions: Sequence[Dict], output_path: str
    ) -> None:
        self._record(
            "transitions",
            {"video": video_path, "transitions": list(transitions), "output": output_path},
            build_transition_cmd(video_path, transitions, output_path, self.config),
            output_path,
        )

    async def get_video_duration(self, video_path: str) -> float:
        self._record("probe", {"video": video_path}, [], None)
        return MOCK_VIDEO_DURATION

    async def resize_video(self, video_path: str, output_path: str) -> None:
        self._record(
            "resize",
            {"video": video_path, "size": self.config.size, "output": output_path},
            build_resize_cmd(video_path, output_path, self.config),
            output_path,
        )
