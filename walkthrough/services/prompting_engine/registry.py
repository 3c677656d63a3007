"""
Prompt Registry

All prompts the pipeline sends, looked up by name. A prompts directory can
override any built-in template with a ``<file-name>.md`` file, e.g.
``workflow-analysis.md`` replaces ``WORKFLOW_ANALYSIS``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from walkthrough.core import get_logger

from .prompts import PromptTemplate, SCRIPT_GENERATION, VIDEO_EDITING, WORKFLOW_ANALYSIS

logger = get_logger(__name__, component="prompts")

DEFAULT_AUDIENCE = "general users"
DEFAULT_TONE = "professional"
DEFAULT_STYLE = "informative"

# Registry name -> override file stem
FILE_NAMES = {
    "WORKFLOW_ANALYSIS": "workflow-analysis",
    "SCRIPT_GENERATION": "script-generation",
    "VIDEO_EDITING": "video-editing",
}


class PromptRegistry:
    """Named prompt templates with optional on-disk overrides"""

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else None
        self._prompts: Dict[str, PromptTemplate] = {
            "WORKFLOW_ANALYSIS": WORKFLOW_ANALYSIS,
            "SCRIPT_GENERATION": SCRIPT_GENERATION,
            "VIDEO_EDITING": VIDEO_EDITING,
        }
        self._overrides: Dict[str, PromptTemplate] = {}

    def _load_override(self, name: str) -> Optional[PromptTemplate]:
        if self.prompts_dir is None:
            return None
        if name in self._overrides:
            return self._overrides[name]

        stem = FILE_NAMES.get(name, name.lower().replace("_", "-"))
        path = self.prompts_dir / f"{stem}.md"
        if not path.exists():
            return None

        template = PromptTemplate(
            template=path.read_text(encoding="utf-8"),
            description=f"Loaded from {path}",
        )
        self._overrides[name] = template
        logger.debug(f"Loaded prompt override {name} from {path}")
        return template

    def get(self, name: str) -> PromptTemplate:
        """Get a prompt template by name"""
        override = self._load_override(name)
        if override is not None:
            return override
        if name not in self._prompts:
            raise KeyError(f"Unknown prompt: {name}. Available: {self.list_prompts()}")
        return self._prompts[name]

    def format(self, name: str, **kwargs) -> str:
        """Get and format a prompt in one call"""
        return self.get(name).format(**kwargs)

    def list_prompts(self) -> List[str]:
        names = set(self._prompts)
        if self.prompts_dir and self.prompts_dir.is_dir():
            stems = {stem: name for name, stem in FILE_NAMES.items()}
            for path in self.prompts_dir.glob("*.md"):
                names.add(stems.get(path.stem, path.stem.upper().replace("-", "_")))
        return sorted(names)

    # ------------------------------------------------------------------
    # Task-specific builders
    # ------------------------------------------------------------------

    def workflow_analysis(self, *, url: str, duration: float, actions: Sequence[str]) -> str:
        return self.format(
            "WORKFLOW_ANALYSIS",
            url=url,
            duration=_format_number(duration),
            stepCount=len(actions),
            actions=json.dumps(list(actions)),
        )

    def script_generation(
        self,
        *,
        analysis: Dict[str, Any],
        duration: float,
        audience: Optional[str] = None,
        tone: Optional[str] = None,
        style: Optional[str] = None,
    ) -> str:
        return self.format(
            "SCRIPT_GENERATION",
            analysis=json.dumps(analysis, indent=2),
            duration=_format_number(duration),
            audience=audience or DEFAULT_AUDIENCE,
            tone=tone or DEFAULT_TONE,
            style=style or DEFAULT_STYLE,
        )

    def video_editing(self, *, workflow: Dict[str, Any], script: List[Dict[str, Any]]) -> str:
        return self.format(
            "VIDEO_EDITING",
            workflow=json.dumps(workflow, indent=2),
            script=json.dumps(script, indent=2),
        )


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


prompts = PromptRegistry()


def get_prompt(name: str) -> PromptTemplate:
    """Get a prompt template"""
    return prompts.get(name)


def format_prompt(name: str, **kwargs) -> str:
    """Get and format a prompt"""
    return prompts.format(name, **kwargs)


def list_prompts() -> List[str]:
    """List all available prompts"""
    return prompts.list_prompts()
