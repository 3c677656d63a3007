"""
Data models shared across the pipeline
"""

from .workflow import (
    Coordinates,
    Viewport,
    Workflow,
    WorkflowMetadata,
    WorkflowStep,
    key_steps,
    load_workflow,
)
from .script import ScriptSegment, dump_segments
from .overlay import OverlayPosition, OverlayStyle, TextOverlay, dump_overlays

__all__ = [
    "Coordinates",
    "Viewport",
    "Workflow",
    "WorkflowMetadata",
    "WorkflowStep",
    "key_steps",
    "load_workflow",
    "ScriptSegment",
    "dump_segments",
    "OverlayPosition",
    "OverlayStyle",
    "TextOverlay",
    "dump_overlays",
]
