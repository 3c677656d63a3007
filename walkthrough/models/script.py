"""
Narration script models
"""

import json
from typing import List, Sequence

from pydantic import Field

from .base import CamelModel


class ScriptSegment(CamelModel):
    """A timed narration line.

    ``0 <= start_time <= end_time <= workflow.duration`` holds for every
    segment the script generator returns; overlaps between segments are
    allowed.
    """
    start_time: float
    end_time: float
    text: str
    emphasis: List[str] = Field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


def dump_segments(segments: Sequence[ScriptSegment], indent: int = 2) -> str:
    """Serialize a script as the JSON array written next to the video"""
    return json.dumps([segment.to_wire() for segment in segments], indent=indent)
