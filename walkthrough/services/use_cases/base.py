"""
Base use case class.

Each use case wraps one operation behind a request/response pair so it can
be driven from a CLI, a worker or a test without changes.

Example:
    >>> class ComposeUseCase(UseCase[ComposeRequest, ComposeResult]):
    ...     async def execute(self, request: ComposeRequest) -> ComposeResult:
    ...         ...
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """Base use case abstract class."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Execute the use case and return a response."""
