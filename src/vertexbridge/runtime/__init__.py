"""Async runtime loop accumulating streamed responses."""

from .loop import ResponseRuntime, SessionTranscript
from .state import ResponseState

__all__ = [
    "ResponseRuntime",
    "ResponseState",
    "SessionTranscript",
]
