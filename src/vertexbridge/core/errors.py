"""Custom exception types raised by vertexbridge adapters."""

from __future__ import annotations


class AdapterError(RuntimeError):
    """Raised when an adapter cannot fulfil a request."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigurationError(AdapterError):
    """Raised when a vendor client rejects the adapter configuration."""


class ProviderError(AdapterError):
    """Raised when a vendor request or stream fails and the adapter wraps it."""
