"""
Structured logging configuration for the walkthrough pipeline.

Provides:
- JSON logging for machine consumption
- Coloured human-readable logs for local runs
- Run and workflow correlation IDs carried through context variables
- Timing of pipeline stages
"""

import json
import logging
import os
import sys
import time
from contextvars import ContextVar
from datetime import datetime, UTC
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

REDACTED = "***REDACTED***"
SENSITIVE_KEY_TOKENS = ("password", "secret", "token", "api_key", "apikey", "authorization")
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "asyncio", "pydub.converter")
DEFAULT_MAX_LOG_BYTES = 20 * 1024 * 1024

run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)
workflow_id_var: ContextVar[Optional[str]] = ContextVar("workflow_id", default=None)

# Attributes every LogRecord has; anything else on a record came from ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def current_context() -> Dict[str, str]:
    """Correlation IDs that are set in the current context"""
    context = {"run_id": run_id_var.get(), "workflow_id": workflow_id_var.get()}
    return {key: value for key, value in context.items() if value}


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(token in lowered for token in SENSITIVE_KEY_TOKENS)


def redact(value: Any, key: str = "") -> Any:
    """Mask values stored under credential-looking keys, recursively"""
    if isinstance(value, dict):
        return {
            child_key: REDACTED if _is_sensitive(str(child_key)) else redact(child_value, str(child_key))
            for child_key, child_value in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(item, key) for item in value)
    if isinstance(value, str) and _is_sensitive(key):
        return REDACTED
    return value


def _record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    extras = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and not key.startswith("_")
        and key not in ("run_id", "workflow_id")
        and not callable(value)
    }
    return redact(extras)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **current_context(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        extras = _record_extras(record)
        if extras:
            payload["extra"] = extras

        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Coloured single-line output for local runs"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    # (context key, label, characters shown)
    CONTEXT_LABELS = (("run_id", "run", 8), ("workflow_id", "wf", 12))

    def _context_tag(self) -> str:
        context = current_context()
        parts = [
            f"{label}:{context[key][:width]}"
            for key, label, width in self.CONTEXT_LABELS
            if key in context
        ]
        return f" [{', '.join(parts)}]" if parts else ""

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        line = (
            f"{color}{clock} {record.levelname:8s}{self.RESET} "
            f"{record.name:30s}{self._context_tag()} {record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggerAdapter(logging.LoggerAdapter):
    """Merges bound fields, correlation IDs and per-call ``extra``.

    Per-call values override correlation IDs, which override bound fields.
    """

    def process(self, msg: str, kwargs: Any) -> tuple:
        kwargs["extra"] = {
            **(self.extra or {}),
            **current_context(),
            **(kwargs.get("extra") or {}),
        }
        return msg, kwargs


def _file_handler(log_file: Path) -> RotatingFileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_file,
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(DEFAULT_MAX_LOG_BYTES))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    use_json: bool = False,
) -> None:
    """
    Configure the root logger for a pipeline run

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional rotating log file; always written as JSON
        use_json: JSON on the console instead of coloured text
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handlers = [(logging.StreamHandler(sys.stdout), StructuredFormatter() if use_json else DevelopmentFormatter())]
    if log_file:
        handlers.append((_file_handler(log_file), StructuredFormatter()))

    for handler, formatter in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> LoggerAdapter:
    """
    Logger with fields bound to every record

    Example:
        logger = get_logger(__name__, component="voiceover")
        logger.info("Synthesized segment", extra={"segment": 2})
    """
    return LoggerAdapter(logging.getLogger(name), extra)


def set_run_id(run_id: str) -> None:
    run_id_var.set(run_id)


def set_workflow_id(workflow_id: str) -> None:
    workflow_id_var.set(workflow_id)


def clear_context() -> None:
    run_id_var.set(None)
    workflow_id_var.set(None)


class LogTimer:
    """Logs the start, end and duration of the wrapped block"""

    def __init__(self, logger: logging.LoggerAdapter, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self) -> "LogTimer":
        self._started = time.perf_counter()
        self.logger.log(self.level, f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb) -> None:
        self.duration = time.perf_counter() - self._started
        if exc_type is not None:
            self.logger.error(
                f"Failed: {self.operation}",
                extra={"duration_seconds": self.duration, "error": str(exc_val)},
            )
            return
        self.logger.log(self.level, f"Completed: {self.operation}", extra={"duration_seconds": self.duration})
