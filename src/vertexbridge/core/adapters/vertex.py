"""Vertex AI adapter routing Claude and Gemini models to their vendor SDKs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable, Mapping

from anthropic import AsyncAnthropicVertex
from google import genai

from ...config import ProviderConfig
from ..errors import AdapterError, ConfigurationError
from ..message import Message
from ..models import (
    VERTEX_DEFAULT_MODEL_ID,
    VERTEX_MODELS,
    ModelDescriptor,
    ModelFamily,
    ModelInfo,
    resolve_model,
)
from .anthropic import AnthropicStreamIterator, build_anthropic_payload
from .base import ModelAdapter
from .gemini import GeminiStreamIterator, build_gemini_payload
from .stream import BaseStreamIterator
from .utils import ensure_messages

LOGGER = logging.getLogger(__name__)


def create_anthropic_client(config: ProviderConfig) -> Any:
    """Build the Anthropic SDK client for Claude models on Vertex AI."""

    options: dict[str, Any] = {}
    if config.project_id is not None:
        options["project_id"] = config.project_id
    if config.region is not None:
        options["region"] = config.region
    return AsyncAnthropicVertex(**options)


def create_genai_client(config: ProviderConfig) -> Any:
    """Build the Google Gen AI SDK client for Gemini models on Vertex AI."""

    options: dict[str, Any] = {"vertexai": True}
    if config.project_id is not None:
        options["project"] = config.project_id
    if config.region is not None:
        options["location"] = config.region
    return genai.Client(**options)


class VertexAdapter(ModelAdapter):
    """Stream Claude and Gemini responses from Vertex AI as canonical events.

    Both vendor clients are built once, scoped to the configured project and
    region, and kept for the adapter's lifetime. Identifiers are not checked
    here; whatever a vendor client rejects at construction surfaces as
    :class:`ConfigurationError`.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        anthropic_client: Any | None = None,
        genai_client: Any | None = None,
        models: Mapping[str, ModelInfo] = VERTEX_MODELS,
        default_model_id: str = VERTEX_DEFAULT_MODEL_ID,
    ) -> None:
        if default_model_id not in models:
            msg = f"default model '{default_model_id}' is missing from the model table"
            raise ValueError(msg)

        self._config = config
        self._models = models
        self._default_model_id = default_model_id

        if anthropic_client is None:
            anthropic_client = self._build_client(create_anthropic_client, "Anthropic Vertex")
        if genai_client is None:
            genai_client = self._build_client(create_genai_client, "Gen AI")
        self._anthropic_client = anthropic_client
        self._genai_client = genai_client

    @property
    def config(self) -> ProviderConfig:
        return self._config

    def create_message(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        /,
    ) -> BaseStreamIterator:
        if not isinstance(system_prompt, str):
            msg = "system_prompt must be a string"
            raise AdapterError(msg)
        history = ensure_messages(messages)

        model = self.get_model()
        family = model.info.family
        LOGGER.debug("routing model=%s family=%s messages=%s", model.id, family.value, len(history))

        if family is ModelFamily.GEMINI:
            return GeminiStreamIterator(self._genai_client, build_gemini_payload(model, history))
        if family is ModelFamily.CLAUDE:
            payload = build_anthropic_payload(model, system_prompt, history)
            return AnthropicStreamIterator(self._anthropic_client, payload)

        msg = f"unsupported model family '{family}'"
        raise AdapterError(msg)

    def get_model(self) -> ModelDescriptor:
        return resolve_model(
            self._config.model_id,
            models=self._models,
            default_model_id=self._default_model_id,
        )

    def _build_client(self, factory: Callable[[ProviderConfig], Any], name: str) -> Any:
        try:
            client = factory(self._config)
        except Exception as exc:
            msg = f"{name} client rejected the configuration: {exc}"
            raise ConfigurationError(msg) from exc
        LOGGER.debug(
            "built %s client project=%s region=%s",
            name,
            self._config.project_id,
            self._config.region,
        )
        return client
