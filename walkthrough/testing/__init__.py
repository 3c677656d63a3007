"""
Deterministic sample data used by mock mode and tests
"""

from .samples import (
    SAMPLE_ANALYSIS,
    SAMPLE_OVERLAYS,
    SAMPLE_SCRIPT,
    SAMPLE_WORKFLOW,
    sample_overlays,
    sample_script,
    sample_workflow,
)

__all__ = [
    "SAMPLE_ANALYSIS",
    "SAMPLE_OVERLAYS",
    "SAMPLE_SCRIPT",
    "SAMPLE_WORKFLOW",
    "sample_overlays",
    "sample_script",
    "sample_workflow",
]
