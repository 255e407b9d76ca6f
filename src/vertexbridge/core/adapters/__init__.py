"""Adapter interfaces and provider implementations."""

from __future__ import annotations

from .anthropic import AnthropicStreamIterator, AnthropicStreamNormalizer
from .base import ModelAdapter
from .gemini import GeminiStreamIterator, GeminiStreamNormalizer
from .stream import (
    BaseStreamIterator,
    StreamEvent,
    TextEvent,
    UsageEvent,
    replay_stream,
    replay_text,
)
from .vertex import VertexAdapter

__all__ = [
    "AnthropicStreamIterator",
    "AnthropicStreamNormalizer",
    "BaseStreamIterator",
    "GeminiStreamIterator",
    "GeminiStreamNormalizer",
    "ModelAdapter",
    "StreamEvent",
    "TextEvent",
    "UsageEvent",
    "VertexAdapter",
    "replay_stream",
    "replay_text",
]
