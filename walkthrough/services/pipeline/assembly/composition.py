"""
Composition engine

Sequences voiceover synthesis, overlay burn-in and muxing into one output
file. Stages run strictly in order with no retries. Temporary artifacts
are uuid-named and removed on every exit path, and the output only appears
once the final mux has succeeded.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from walkthrough.core import (
    ExecutionError,
    LogTimer,
    NotFoundError,
    WalkthroughError,
    ensure_directory,
    get_logger,
    scoped_temp_file,
)
from walkthrough.models import ScriptSegment, TextOverlay, Workflow
from walkthrough.services.pipeline.audio import VoiceoverGenerator

from .executor import VideoCommandExecutor
from .overlays import OverlayGenerator

logger = get_logger(__name__, component="composition")


class CompositionState(str, Enum):
    IDLE = "idle"
    VOICEOVER_GENERATING = "voiceover_generating"
    OVERLAY_BURNING = "overlay_burning"
    MUXING = "muxing"
    DONE = "done"
    FAILED = "failed"


StateCallback = Callable[[CompositionState], None]


class CompositionEngine:
    """Owns the temporary files of each ``compose_video`` call, nothing else."""

    def __init__(
        self,
        voiceover: VoiceoverGenerator,
        executor: VideoCommandExecutor,
        overlay_generator: Optional[OverlayGenerator] = None,
        work_dir: Optional[Path] = None,
    ):
        self.voiceover = voiceover
        self.executor = executor
        self.overlay_generator = overlay_generator or OverlayGenerator()
        self.work_dir = Path(work_dir) if work_dir else None

    async def generate_overlays(self, workflow: Workflow, script: Sequence[ScriptSegment]) -> List[TextOverlay]:
        return await self.overlay_generator.generate_overlays(workflow, script)

    async def compose_video(
        self,
        video_path: str,
        workflow: Workflow,
        script: Sequence[ScriptSegment],
        overlays: Sequence[TextOverlay],
        output_path: str,
        on_state_change: Optional[StateCallback] = None,
    ) -> None:
        """Write the narrated, overlaid video to ``output_path``.

        Raises:
            NotFoundError: ``video_path`` does not exist (before any stage runs)
            ProviderError: voiceover synthesis failed
            ExecutionError: a media command failed or an overlay was rejected
        """
        if not os.path.exists(video_path):
            raise NotFoundError(f"Recording not found: {video_path}", stage="input")

        output = Path(output_path)
        ensure_directory(output.parent)
        work_dir = self.work_dir or output.parent
        audio_suffix = "." + self.voiceover.config.output_format
        video_suffix = output.suffix or ".mp4"

        state = CompositionState.IDLE

        def transition(new_state: CompositionState) -> None:
            nonlocal state
            state = new_state
            logger.debug(f"Composition state -> {new_state.value}")
            if on_state_change is not None:
                on_state_change(new_state)

        with LogTimer(logger, f"composition of {workflow.id}"), \
                scoped_temp_file(work_dir, "voiceover", audio_suffix) as audio_path, \
                scoped_temp_file(work_dir, "overlaid", video_suffix) as overlaid_path, \
                scoped_temp_file(output.parent, f".{output.stem}.partial", video_suffix) as partial_path:
            try:
                transition(CompositionState.VOICEOVER_GENERATING)
                audio = await self.voiceover.generate_voiceover(script)
                if not audio:
                    raise ExecutionError("Voiceover produced no audio")
                audio_path.write_bytes(audio)

                transition(CompositionState.OVERLAY_BURNING)
                await self.executor.add_text_overlays(video_path, list(overlays), str(overlaid_path))

                transition(CompositionState.MUXING)
                await self.executor.add_audio_track(str(overlaid_path), str(audio_path), str(partial_path))
                os.replace(partial_path, output)
            except WalkthroughError as exc:
                exc.stage = state.value
                transition(CompositionState.FAILED)
                raise
            except Exception as exc:
                failed_stage = state.value
                transition(CompositionState.FAILED)
                raise ExecutionError(str(exc), stage=failed_stage) from exc

        transition(CompositionState.DONE)
        logger.info(f"Composed video written to {output}")
