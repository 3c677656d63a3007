"""
WalkthroughPipeline - one workflow in, one narrated video out.

Runs the script generator, the overlay generator and the composition
engine in order, writes the intermediate script and overlays next to the
video, and wires the providers from configuration.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from walkthrough.config import AIConfig, PipelineSettings, VideoConfig, VoiceoverConfig
from walkthrough.core import (
    REQUIRED_MEDIA_TOOLS,
    LogTimer,
    assert_runtime_tools_available,
    get_logger,
    set_run_id,
    set_workflow_id,
    setup_logging,
)
from walkthrough.models import ScriptSegment, TextOverlay, Workflow, dump_overlays, dump_segments
from walkthrough.services.llm import TextProvider, create_text_provider
from walkthrough.services.pipeline.assembly import (
    CompositionEngine,
    CompositionState,
    OverlayGenerator,
    VideoCommandExecutor,
    create_video_executor,
)
from walkthrough.services.pipeline.audio import VoiceoverGenerator, create_voiceover_generator
from walkthrough.services.pipeline.script_generation import ScriptGenerator

from .base import UseCase

logger = get_logger(__name__, component="pipeline")


@dataclass
class WalkthroughRequest:
    workflow: Workflow
    video_path: str
    output_path: str
    tone: Optional[str] = None
    style: Optional[str] = None
    audience: Optional[str] = None
    on_state_change: Optional[Callable[[CompositionState], None]] = None


@dataclass
class WalkthroughResult:
    run_id: str
    output_path: str
    script_path: str
    overlays_path: str
    script: List[ScriptSegment] = field(default_factory=list)
    overlays: List[TextOverlay] = field(default_factory=list)


class WalkthroughPipeline(UseCase[WalkthroughRequest, WalkthroughResult]):
    def __init__(
        self,
        provider: TextProvider,
        voiceover: VoiceoverGenerator,
        executor: VideoCommandExecutor,
        work_dir: Optional[Path] = None,
    ):
        self.script_generator = ScriptGenerator(provider)
        self.composition = CompositionEngine(
            voiceover=voiceover,
            executor=executor,
            overlay_generator=OverlayGenerator(provider),
            work_dir=work_dir,
        )

    @classmethod
    def from_config(
        cls,
        ai_config: AIConfig,
        voiceover_config: VoiceoverConfig,
        video_config: VideoConfig,
        settings: Optional[PipelineSettings] = None,
    ) -> "WalkthroughPipeline":
        settings = settings or PipelineSettings()
        setup_logging(settings.log_level, settings.log_file, settings.use_json_logs)
        if not settings.use_mocks:
            assert_runtime_tools_available(REQUIRED_MEDIA_TOOLS, context="startup")
        return cls(
            provider=create_text_provider(ai_config, settings.use_mocks, settings.mock_delay),
            voiceover=create_voiceover_generator(voiceover_config, settings.use_mocks, settings.mock_delay),
            executor=create_video_executor(video_config, settings.use_mocks),
            work_dir=settings.work_dir,
        )

    async def execute(self, request: WalkthroughRequest) -> WalkthroughResult:
        run_id = uuid.uuid4().hex
        set_run_id(run_id)
        set_workflow_id(request.workflow.id)

        output = Path(request.output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        script_path = output.with_name(f"{output.stem}.script.json")
        overlays_path = output.with_name(f"{output.stem}.overlays.json")

        with LogTimer(logger, f"walkthrough for {request.workflow.id}"):
            script = await self.script_generator.generate_script(
                request.workflow,
                tone=request.tone,
                style=request.style,
                audience=request.audience,
            )
            script_path.write_text(dump_segments(script), encoding="utf-8")

            overlays = await self.composition.generate_overlays(request.workflow, script)
            overlays_path.write_text(dump_overlays(overlays), encoding="utf-8")

            await self.composition.compose_video(
                request.video_path,
                request.workflow,
                script,
                overlays,
                str(output),
                on_state_change=request.on_state_change,
            )

        return WalkthroughResult(
            run_id=run_id,
            output_path=str(output),
            script_path=str(script_path),
            overlays_path=str(overlays_path),
            script=script,
            overlays=overlays,
        )
