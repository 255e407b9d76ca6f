"""Static metadata for the models served through Vertex AI."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class ModelFamily(str, Enum):
    """Vendor family used to route a request to the matching client."""

    CLAUDE = "claude"
    GEMINI = "gemini"


class ModelInfo(BaseModel):
    """Capabilities and pricing advertised for a single model."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: ModelFamily = Field(..., description="Vendor family serving the model.")
    max_tokens: int | None = Field(None, ge=1, description="Maximum number of output tokens per response.")
    context_window: int | None = Field(None, ge=1, description="Maximum prompt size in tokens.")
    supports_images: bool = Field(default=False, description="Whether image content blocks are accepted.")
    supports_prompt_cache: bool = Field(default=False, description="Whether prompt caching is available.")
    input_price: float | None = Field(None, ge=0, description="USD per million input tokens.")
    output_price: float | None = Field(None, ge=0, description="USD per million output tokens.")


class ModelDescriptor(BaseModel):
    """A model identifier paired with its :class:`ModelInfo`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Vertex model identifier.")
    info: ModelInfo


VERTEX_DEFAULT_MODEL_ID = "claude-3-5-sonnet-v2@20241022"

VERTEX_MODELS: Mapping[str, ModelInfo] = MappingProxyType(
    {
        "claude-3-5-sonnet-v2@20241022": ModelInfo(
            family=ModelFamily.CLAUDE,
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            input_price=3.0,
            output_price=15.0,
        ),
        "claude-3-5-sonnet@20240620": ModelInfo(
            family=ModelFamily.CLAUDE,
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            input_price=3.0,
            output_price=15.0,
        ),
        "claude-3-5-haiku@20241022": ModelInfo(
            family=ModelFamily.CLAUDE,
            max_tokens=8192,
            context_window=200_000,
            input_price=1.0,
            output_price=5.0,
        ),
        "claude-3-opus@20240229": ModelInfo(
            family=ModelFamily.CLAUDE,
            max_tokens=4096,
            context_window=200_000,
            supports_images=True,
            input_price=15.0,
            output_price=75.0,
        ),
        "claude-3-haiku@20240307": ModelInfo(
            family=ModelFamily.CLAUDE,
            max_tokens=4096,
            context_window=200_000,
            supports_images=True,
            input_price=0.25,
            output_price=1.25,
        ),
        "gemini-2.0-flash-exp": ModelInfo(
            family=ModelFamily.GEMINI,
            max_tokens=8192,
            context_window=1_048_576,
            supports_images=True,
            input_price=0.0,
            output_price=0.0,
        ),
        "gemini-1.5-flash-002": ModelInfo(
            family=ModelFamily.GEMINI,
            max_tokens=8192,
            context_window=1_048_576,
            supports_images=True,
            input_price=0.0,
            output_price=0.0,
        ),
        "gemini-1.5-pro-002": ModelInfo(
            family=ModelFamily.GEMINI,
            max_tokens=8192,
            context_window=2_097_152,
            supports_images=True,
            input_price=0.0,
            output_price=0.0,
        ),
    }
)


def resolve_model(
    model_id: str | None,
    *,
    models: Mapping[str, ModelInfo] = VERTEX_MODELS,
    default_model_id: str = VERTEX_DEFAULT_MODEL_ID,
) -> ModelDescriptor:
    """Return the descriptor for ``model_id`` or the default when it is unknown."""

    if model_id and model_id in models:
        return ModelDescriptor(id=model_id, info=models[model_id])
    return ModelDescriptor(id=default_model_id, info=models[default_model_id])


def calculate_cost(info: ModelInfo, input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of a response from the model's advertised prices."""

    input_cost = ((info.input_price or 0.0) / 1_000_000) * input_tokens
    output_cost = ((info.output_price or 0.0) / 1_000_000) * output_tokens
    return input_cost + output_cost


__all__ = [
    "ModelDescriptor",
    "ModelFamily",
    "ModelInfo",
    "VERTEX_DEFAULT_MODEL_ID",
    "VERTEX_MODELS",
    "calculate_cost",
    "resolve_model",
]
