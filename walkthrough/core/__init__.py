"""
Core utilities shared by every pipeline stage
"""

from .exceptions import (
    WalkthroughError,
    ProviderError,
    ProviderTimeoutError,
    ParseError,
    ExecutionError,
    ValidationError,
    NotFoundError,
)
from .logging import (
    setup_logging,
    get_logger,
    set_run_id,
    set_workflow_id,
    clear_context,
    LogTimer,
)
from .runtime import (
    parse_bool_env,
    parse_float_env,
    REQUIRED_MEDIA_TOOLS,
    missing_runtime_tools,
    assert_runtime_tools_available,
)
from .files import ensure_directory, scoped_temp_file, unique_temp_path, remove_quietly

__all__ = [
    "WalkthroughError",
    "ProviderError",
    "ProviderTimeoutError",
    "ParseError",
    "ExecutionError",
    "ValidationError",
    "NotFoundError",
    "setup_logging",
    "get_logger",
    "set_run_id",
    "set_workflow_id",
    "clear_context",
    "LogTimer",
    "parse_bool_env",
    "parse_float_env",
    "REQUIRED_MEDIA_TOOLS",
    "missing_runtime_tools",
    "assert_runtime_tools_available",
    "ensure_directory",
    "scoped_temp_file",
    "unique_temp_path",
    "remove_quietly",
]
