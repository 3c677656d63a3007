"""
On-screen text overlay models

Overlays are plain data. Range checks live in
``walkthrough.services.pipeline.assembly.validation`` so that invalid
overlays coming from AI output can still be represented and rejected.
"""

import json
from typing import Optional, Sequence

from pydantic import Field

from .base import CamelModel

DEFAULT_FONT_SIZE = 32
DEFAULT_COLOR = "#FFFFFF"
DEFAULT_BACKGROUND = "#00000080"
DEFAULT_FONT_FAMILY = "Arial"


class OverlayPosition(CamelModel):
    """Position in percent of the frame (0-100 on both axes)"""
    x: float = 50.0
    y: float = 20.0


class OverlayStyle(CamelModel):
    font_size: int = DEFAULT_FONT_SIZE
    color: str = DEFAULT_COLOR
    background_color: Optional[str] = DEFAULT_BACKGROUND
    font_family: str = DEFAULT_FONT_FAMILY


class TextOverlay(CamelModel):
    text: str
    start_time: float
    end_time: float
    position: OverlayPosition = Field(default_factory=OverlayPosition)
    style: OverlayStyle = Field(default_factory=OverlayStyle)


def dump_overlays(overlays: Sequence[TextOverlay], indent: int = 2) -> str:
    """Serialize overlays as the JSON array written next to the video"""
    return json.dumps([overlay.to_wire() for overlay in overlays], indent=indent)
