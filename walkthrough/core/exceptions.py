"""
Core Exceptions
Standardized exceptions for the walkthrough pipeline.

Every error that leaves a pipeline stage carries the name of that stage in
``stage`` so callers can report where a composition failed.
"""

from typing import Optional


class WalkthroughError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str = "", stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class ProviderError(WalkthroughError):
    """AI or TTS backend is unreachable, unauthorized or unsupported."""
    pass


class ProviderTimeoutError(ProviderError):
    """AI or TTS backend did not answer within the configured timeout."""
    pass


class ParseError(WalkthroughError):
    """AI response was not in the expected shape."""
    pass


class ExecutionError(WalkthroughError):
    """Underlying video or audio command failed."""

    def __init__(
        self,
        message: str = "",
        stage: Optional[str] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message, stage)
        self.stderr = stderr


class ValidationError(ExecutionError):
    """Overlay rejected by the strict check at the executor boundary."""
    pass


class NotFoundError(WalkthroughError):
    """Referenced input file does not exist."""
    pass
