"""
Runtime environment guards and dependency checks.
"""

import shutil
from typing import Iterable, List

from .exceptions import ExecutionError


REQUIRED_MEDIA_TOOLS = ("ffmpeg", "ffprobe")


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_float_env(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def missing_runtime_tools(tools: Iterable[str]) -> List[str]:
    return [tool for tool in tools if shutil.which(tool) is None]


def assert_runtime_tools_available(tools: Iterable[str], *, context: str) -> None:
    missing = missing_runtime_tools(tools)
    if missing:
        missing_list = ", ".join(sorted(set(missing)))
        raise ExecutionError(
            f"Missing required runtime tools for {context}: {missing_list}",
            stage=context,
        )
