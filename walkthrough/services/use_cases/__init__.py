"""
Use cases - entry points that drive the whole pipeline
"""

from .base import UseCase
from .generation_use_case import WalkthroughPipeline, WalkthroughRequest, WalkthroughResult

__all__ = [
    "UseCase",
    "WalkthroughPipeline",
    "WalkthroughRequest",
    "WalkthroughResult",
]
