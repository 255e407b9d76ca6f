"""Core data structures and adapter interfaces for vertexbridge."""

from __future__ import annotations

from .errors import AdapterError, ConfigurationError, ProviderError
from .message import Message, MessageRole
from .models import (
    VERTEX_DEFAULT_MODEL_ID,
    VERTEX_MODELS,
    ModelDescriptor,
    ModelFamily,
    ModelInfo,
)

__all__ = [
    "AdapterError",
    "ConfigurationError",
    "Message",
    "MessageRole",
    "ModelDescriptor",
    "ModelFamily",
    "ModelInfo",
    "ProviderError",
    "VERTEX_DEFAULT_MODEL_ID",
    "VERTEX_MODELS",
]
