"""
Validation and fallback for AI-written scripts

Nothing here raises: malformed elements are dropped, out-of-range times are
clamped, and a script that cannot be recovered is replaced by one segment
per key step of the workflow.
"""

import math
from typing import Any, List, Optional

from walkthrough.models import ScriptSegment, Workflow, key_steps

FALLBACK_NARRATION = "Watch as we demonstrate this workflow."

REQUIRED_FIELDS = ("startTime", "endTime", "text")


def _as_seconds(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if math.isfinite(seconds) else None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def normalize_segment(item: Any, duration: float) -> Optional[ScriptSegment]:
    """Turn one raw AI element into a segment, or None if it is unusable"""
    if not isinstance(item, dict) or any(item.get(field) is None for field in REQUIRED_FIELDS):
        return None

    start = _as_seconds(item["startTime"])
    end = _as_seconds(item["endTime"])
    if start is None or end is None:
        return None

    start = _clamp(start, 0.0, duration)
    end = _clamp(end, start, duration)

    emphasis = item.get("emphasis")
    if not isinstance(emphasis, list):
        emphasis = []

    return ScriptSegment(
        start_time=start,
        end_time=end,
        text=str(item["text"]),
        emphasis=[str(word) for word in emphasis],
    )


def validate_and_normalize_segments(items: List[Any], duration: float) -> List[ScriptSegment]:
    """Keep the usable elements, clamped to ``[0, duration]`` and sorted by start"""
    segments = [
        segment
        for segment in (normalize_segment(item, duration) for item in items)
        if segment is not None
    ]
    # sorted() is stable, so equal starts keep the model's order
    return sorted(segments, key=lambda segment: segment.start_time)


def generate_basic_segments(workflow: Workflow) -> List[ScriptSegment]:
    """Heuristic script: one line per click/navigate step"""
    duration = workflow.duration
    steps = key_steps(workflow)

    if not steps:
        return [ScriptSegment(start_time=0.0, end_time=duration, text=FALLBACK_NARRATION)]

    segment_duration = duration / len(steps)
    segments = []
    for index, step in enumerate(steps):
        start = _clamp(step.timestamp, 0.0, duration)
        text = f"Step {index + 1}: {step.action}"
        if step.target:
            text += f" on {step.target}"
        segments.append(
            ScriptSegment(
                start_time=start,
                end_time=min(start + segment_duration, duration),
                text=text,
            )
        )
    return sorted(segments, key=lambda segment: segment.start_time)
