"""
Prompting Engine - prompt templates for every AI call in the pipeline

PROMPT ORGANIZATION:
    prompts/
    ├── workflow_analysis.py  # Analyze a recorded workflow
    ├── script_generation.py  # Write timed narration
    └── video_editing.py      # Suggest text overlays

Usage:
    from walkthrough.services.prompting_engine import format_prompt

    prompt = format_prompt("WORKFLOW_ANALYSIS", url=..., duration=..., stepCount=..., actions=...)
"""

from .prompts import PromptTemplate
from .registry import (
    DEFAULT_AUDIENCE,
    DEFAULT_STYLE,
    DEFAULT_TONE,
    PromptRegistry,
    format_prompt,
    get_prompt,
    list_prompts,
    prompts,
)

__all__ = [
    "PromptTemplate",
    "PromptRegistry",
    "DEFAULT_AUDIENCE",
    "DEFAULT_STYLE",
    "DEFAULT_TONE",
    "format_prompt",
    "get_prompt",
    "list_prompts",
    "prompts",
]
