"""
Overlay validation

Two checks with different jobs:

- ``normalize_overlay`` repairs AI-suggested overlays (fills defaults,
  clamps ranges) and returns None for anything it cannot repair.
- ``assert_valid_overlay`` guards the executor boundary and rejects any
  overlay that breaks an invariant, without modifying it.
"""

import math
import re
from typing import Any, Callable, Dict, Optional

from walkthrough.core import ValidationError
from walkthrough.models import OverlayPosition, OverlayStyle, TextOverlay

MIN_PERCENT = 0.0
MAX_PERCENT = 100.0
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 200

# Style values drawtext accepts verbatim inside a filter graph
HEX_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}(?:[0-9A-Fa-f]{2})?")
NAMED_COLORS = frozenset(
    {"white", "black", "red", "green", "blue", "yellow", "cyan", "magenta", "gray", "grey", "orange", "purple"}
)
FONT_FAMILY_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9 _-]{0,63}")


def is_safe_color(value: Any) -> bool:
    """``#RRGGBB``, ``#RRGGBBAA`` or a basic color name"""
    if not isinstance(value, str):
        return False
    return bool(HEX_COLOR_RE.fullmatch(value)) or value.lower() in NAMED_COLORS


def is_safe_font_family(value: Any) -> bool:
    return isinstance(value, str) and bool(FONT_FAMILY_RE.fullmatch(value))


def assert_valid_overlay(overlay: TextOverlay) -> None:
    """Raise ValidationError unless the overlay can be rendered as-is."""
    if not overlay.text or not overlay.text.strip():
        raise ValidationError("Overlay text cannot be empty", stage="overlay_validation")
    if overlay.start_time < 0:
        raise ValidationError("Overlay startTime cannot be negative", stage="overlay_validation")
    if overlay.end_time <= overlay.start_time:
        raise ValidationError(
            "Overlay endTime must be greater than startTime", stage="overlay_validation"
        )
    for axis in ("x", "y"):
        value = getattr(overlay.position, axis)
        if not MIN_PERCENT <= value <= MAX_PERCENT:
            raise ValidationError(
                f"Overlay position {axis} must be between 0 and 100", stage="overlay_validation"
            )
    style = overlay.style
    for field_name, value in (("color", style.color), ("backgroundColor", style.background_color)):
        if field_name == "backgroundColor" and not value:
            continue
        if not is_safe_color(value):
            raise ValidationError(
                f"Overlay {field_name} must be #RRGGBB, #RRGGBBAA or a basic color name",
                stage="overlay_validation",
            )
    if not is_safe_font_family(style.font_family):
        raise ValidationError("Overlay fontFamily contains unsupported characters", stage="overlay_validation")


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_or_default(value: Any, default: Any, is_safe: Callable[[Any], bool]) -> Any:
    return value if is_safe(value) else default


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def normalize_overlay(
    raw: Any,
    duration: float,
    default_position: Optional[OverlayPosition] = None,
    default_style: Optional[OverlayStyle] = None,
) -> Optional[TextOverlay]:
    """Best-effort repair of one AI overlay element.

    Returns None when text or times are missing, or when the clamped window
    is empty.
    """
    if not isinstance(raw, dict):
        return None

    text = raw.get("text")
    start = _number(raw.get("startTime"))
    end = _number(raw.get("endTime"))
    if not isinstance(text, str) or not text.strip() or start is None or end is None:
        return None

    start = _clamp(start, 0.0, duration)
    end = _clamp(end, start, duration)
    if end <= start:
        return None

    default_position = default_position or OverlayPosition()
    default_style = default_style or OverlayStyle()

    position_raw: Dict[str, Any] = raw.get("position") if isinstance(raw.get("position"), dict) else {}
    x = _number(position_raw.get("x"))
    y = _number(position_raw.get("y"))
    position = OverlayPosition(
        x=_clamp(default_position.x if x is None else x, MIN_PERCENT, MAX_PERCENT),
        y=_clamp(default_position.y if y is None else y, MIN_PERCENT, MAX_PERCENT),
    )

    style_raw: Dict[str, Any] = raw.get("style") if isinstance(raw.get("style"), dict) else {}
    font_size = _number(style_raw.get("fontSize"))
    style = OverlayStyle(
        font_size=(
            int(_clamp(font_size, MIN_FONT_SIZE, MAX_FONT_SIZE))
            if font_size is not None and math.isfinite(font_size) and font_size > 0
            else default_style.font_size
        ),
        color=_safe_or_default(style_raw.get("color"), default_style.color, is_safe_color),
        background_color=_safe_or_default(
            style_raw.get("backgroundColor"), default_style.background_color, is_safe_color
        ),
        font_family=_safe_or_default(style_raw.get("fontFamily"), default_style.font_family, is_safe_font_family),
    )

    return TextOverlay(
        text=text.strip(),
        start_time=start,
        end_time=end,
        position=position,
        style=style,
    )
