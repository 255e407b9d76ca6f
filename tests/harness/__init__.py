"""Test harness utilities for adapter validation."""

from .adapter_harness import BaseEvent, collect, collect_async

__all__ = [
    "BaseEvent",
    "collect",
    "collect_async",
]
