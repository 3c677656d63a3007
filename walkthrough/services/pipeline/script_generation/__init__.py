"""
Script generation - workflow analysis and timed narration
"""

from .generator import ScriptGenerator, empty_analysis
from .normalization import (
    FALLBACK_NARRATION,
    generate_basic_segments,
    normalize_segment,
    validate_and_normalize_segments,
)

__all__ = [
    "ScriptGenerator",
    "empty_analysis",
    "FALLBACK_NARRATION",
    "generate_basic_segments",
    "normalize_segment",
    "validate_and_normalize_segments",
]
