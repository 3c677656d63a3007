"""
Overlay generator

Asks the text provider for overlay suggestions and repairs what comes back.
When there is no provider, the call fails, or nothing usable survives, one
overlay per narration segment is generated instead. This path never raises.
"""

from typing import List, Optional, Sequence

from walkthrough.core import get_logger
from walkthrough.models import OverlayPosition, OverlayStyle, ScriptSegment, TextOverlay, Workflow
from walkthrough.services.infrastructure.parsing import parse_json_array_response
from walkthrough.services.llm import GenerationOptions, TextProvider
from walkthrough.services.prompting_engine import PromptRegistry, prompts as default_prompts

from .validation import normalize_overlay

logger = get_logger(__name__, component="overlay_generator")

MAX_OVERLAY_CHARS = 50
BASIC_X = 50.0
# Three vertical bands cycled per segment: 20%, 50%, 80%
BAND_TOP = 20.0
BAND_STEP = 30.0
BAND_COUNT = 3

BASIC_STYLE = OverlayStyle(
    font_size=32,
    color="#FFFFFF",
    background_color="#00000080",
    font_family="Arial",
)


def band_position(index: int) -> OverlayPosition:
    return OverlayPosition(x=BASIC_X, y=BAND_TOP + (index % BAND_COUNT) * BAND_STEP)


def generate_basic_overlays(script: Sequence[ScriptSegment], duration: float) -> List[TextOverlay]:
    """One overlay per segment; segments without text or time are skipped."""
    overlays = []
    for index, segment in enumerate(script):
        text = segment.text.strip()[:MAX_OVERLAY_CHARS].strip()
        start = max(0.0, min(segment.start_time, duration))
        end = max(start, min(segment.end_time, duration))
        if not text or end <= start:
            continue
        overlays.append(
            TextOverlay(
                text=text,
                start_time=start,
                end_time=end,
                position=band_position(index),
                style=BASIC_STYLE,
            )
        )
    return overlays


class OverlayGenerator:
    def __init__(
        self,
        provider: Optional[TextProvider] = None,
        prompts: Optional[PromptRegistry] = None,
        options: Optional[GenerationOptions] = None,
    ):
        self.provider = provider
        self.prompts = prompts or default_prompts
        self.options = options

    async def generate_overlays(self, workflow: Workflow, script: Sequence[ScriptSegment]) -> List[TextOverlay]:
        if self.provider is None:
            return generate_basic_overlays(script, workflow.duration)

        try:
            overlays = await self._generate_ai_overlays(workflow, script)
        except Exception as exc:
            logger.warning(f"AI overlay generation failed, using basic overlays: {exc}")
            return generate_basic_overlays(script, workflow.duration)

        if not overlays:
            logger.warning("No usable AI overlays, using basic overlays")
            return generate_basic_overlays(script, workflow.duration)
        return overlays

    async def _generate_ai_overlays(
        self, workflow: Workflow, script: Sequence[ScriptSegment]
    ) -> List[TextOverlay]:
        prompt = self.prompts.video_editing(
            workflow=workflow.to_wire(),
            script=[segment.to_wire() for segment in script],
        )
        response = await self.provider.generate_text(prompt, self.options)

        items = parse_json_array_response(response, default=[])
        overlays = []
        for index, item in enumerate(items):
            overlay = normalize_overlay(
                item,
                workflow.duration,
                default_position=band_position(index),
                default_style=BASIC_STYLE,
            )
            if overlay is not None:
                overlays.append(overlay)

        dropped = len(items) - len(overlays)
        if dropped:
            logger.info(f"Dropped {dropped} unusable AI overlay(s)")
        return sorted(overlays, key=lambda overlay: overlay.start_time)
