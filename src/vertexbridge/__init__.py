"""Stream Claude and Gemini models hosted on Vertex AI through one interface.

The package wraps the Anthropic and Google Gen AI SDKs behind
:class:`~vertexbridge.core.adapters.VertexAdapter`, which picks a vendor from
the static model table and reshapes each vendor's stream into canonical
:class:`TextEvent` and :class:`UsageEvent` objects.
"""

from __future__ import annotations

from .config import ProviderConfig
from .core.adapters import TextEvent, UsageEvent, VertexAdapter
from .core.errors import AdapterError, ConfigurationError, ProviderError
from .core.message import Message, MessageRole
from .core.models import ModelDescriptor, ModelFamily, ModelInfo
from .runtime import ResponseRuntime

__all__ = [
    "AdapterError",
    "ConfigurationError",
    "Message",
    "MessageRole",
    "ModelDescriptor",
    "ModelFamily",
    "ModelInfo",
    "ProviderConfig",
    "ProviderError",
    "ResponseRuntime",
    "TextEvent",
    "UsageEvent",
    "VertexAdapter",
]

__version__ = "0.1.0"
