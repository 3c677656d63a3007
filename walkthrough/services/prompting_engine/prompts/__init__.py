"""
Prompt templates, one module per pipeline task.
"""

from .base import PromptTemplate
from .workflow_analysis import WORKFLOW_ANALYSIS
from .script_generation import SCRIPT_GENERATION
from .video_editing import VIDEO_EDITING

__all__ = [
    "PromptTemplate",
    "WORKFLOW_ANALYSIS",
    "SCRIPT_GENERATION",
    "VIDEO_EDITING",
]
