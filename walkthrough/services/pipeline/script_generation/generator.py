"""
Script generator

Two sequential AI calls turn a recorded workflow into narration: the first
summarizes what the recording shows, the second writes timed lines from
that summary. Shape problems in either answer are absorbed here; provider
failures are not.
"""

from typing import Any, Dict, List, Optional

from walkthrough.core import LogTimer, get_logger
from walkthrough.models import ScriptSegment, Workflow
from walkthrough.services.infrastructure.parsing import parse_json_array_response, parse_json_response
from walkthrough.services.llm import GenerationOptions, TextProvider
from walkthrough.services.prompting_engine import PromptRegistry, prompts as default_prompts

from .normalization import generate_basic_segments, validate_and_normalize_segments

logger = get_logger(__name__, component="script_generator")

ANALYSIS_KEYS = ("features", "journey", "highlights", "uiElements", "valueProps")


def empty_analysis() -> Dict[str, List[Any]]:
    return {key: [] for key in ANALYSIS_KEYS}


class ScriptGenerator:
    """Workflow -> ordered narration segments"""

    def __init__(
        self,
        provider: TextProvider,
        prompts: Optional[PromptRegistry] = None,
        options: Optional[GenerationOptions] = None,
    ):
        self.provider = provider
        self.prompts = prompts or default_prompts
        self.options = options

    async def analyze_workflow(self, workflow: Workflow) -> Dict[str, Any]:
        """First AI call. Returns the empty-shaped analysis if the answer is unparseable."""
        prompt = self.prompts.workflow_analysis(
            url=workflow.url,
            duration=workflow.duration,
            actions=workflow.actions(),
        )
        response = await self.provider.generate_text(prompt, self.options)

        parsed = parse_json_response(response)
        if parsed is None:
            logger.warning("Workflow analysis was not valid JSON, continuing with an empty analysis")
            return empty_analysis()

        analysis = dict(parsed)
        for key in ANALYSIS_KEYS:
            if not isinstance(analysis.get(key), list):
                analysis[key] = []
        return analysis

    async def generate_script(
        self,
        workflow: Workflow,
        tone: Optional[str] = None,
        style: Optional[str] = None,
        audience: Optional[str] = None,
    ) -> List[ScriptSegment]:
        """Return a non-empty script sorted by start time.

        Raises:
            ProviderError: the text provider failed; shape problems never raise
        """
        with LogTimer(logger, f"script generation for {workflow.id}"):
            analysis = await self.analyze_workflow(workflow)

            prompt = self.prompts.script_generation(
                analysis=analysis,
                duration=workflow.duration,
                audience=audience,
                tone=tone,
                style=style,
            )
            response = await self.provider.generate_text(prompt, self.options)

            items = parse_json_array_response(response)
            if items is None:
                logger.warning("Script response was not a JSON array, using key-step narration")
                return generate_basic_segments(workflow)

            segments = validate_and_normalize_segments(items, workflow.duration)
            if not segments:
                logger.warning(
                    "No usable segments in script response, using key-step narration",
                    extra={"raw_items": len(items)},
                )
                return generate_basic_segments(workflow)

            dropped = len(items) - len(segments)
            if dropped:
                logger.info(f"Dropped {dropped} malformed script segment(s)")
            return segments

