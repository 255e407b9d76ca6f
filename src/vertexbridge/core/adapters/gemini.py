"""Gemini on Vertex AI streaming through the Google Gen AI SDK."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from google.genai import types

from ..errors import ProviderError
from ..message import Message
from ..models import ModelDescriptor
from .stream import ProviderStreamIterator, StreamEvent, StreamNormalizer, TextEvent, coerce_mapping
from .utils import last_message_to_gemini

SAFETY_SETTINGS: tuple[Mapping[str, Any], ...] = (
    {
        "category": types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
        "threshold": types.HarmBlockThreshold.BLOCK_NONE,
    },
)


def create_gemini_stream(client: Any, payload: Mapping[str, Any]) -> Any:
    """Issue a streaming ``generate_content`` request with the provided client."""

    return client.aio.models.generate_content_stream(**payload)


def build_gemini_payload(model: ModelDescriptor, messages: Sequence[Message]) -> dict[str, Any]:
    return {
        "model": model.id,
        "contents": last_message_to_gemini(messages),
        "config": {"safety_settings": [dict(setting) for setting in SAFETY_SETTINGS]},
    }


class GeminiStreamIterator(ProviderStreamIterator):
    """Stream iterator that converts Gen AI responses into text events.

    Any failure raised while issuing the request or reading the stream is
    re-raised once as :class:`ProviderError`; the stream is closed and no
    further events are produced.
    """

    provider_name = "Gemini"

    def __init__(
        self,
        client: Any,
        payload: Mapping[str, Any],
        *,
        normalizer: StreamNormalizer | None = None,
    ) -> None:
        self.payload = dict(payload)
        super().__init__(
            lambda: create_gemini_stream(client, self.payload),
            normalizer or GeminiStreamNormalizer(),
        )

    async def _get_next_chunk(self) -> dict[str, Any]:
        try:
            return await super()._get_next_chunk()
        except StopAsyncIteration:
            raise
        except Exception as exc:
            msg = f"Gemini API error: {exc}"
            raise ProviderError(msg) from exc


class GeminiStreamNormalizer(StreamNormalizer):
    """Emit the first candidate's first text part of each response chunk."""

    async def normalize_chunk(self, chunk: Mapping[str, Any]) -> list[StreamEvent]:
        try:
            text = self._first_text(chunk)
        except ProviderError:
            raise
        except Exception as exc:
            msg = f"Gemini API error: {exc}"
            raise ProviderError(msg) from exc
        if not text:
            return []
        return [TextEvent(text=text)]

    def _first_text(self, chunk: Mapping[str, Any]) -> str | None:
        candidates = chunk.get("candidates")
        if not candidates:
            return None
        candidate = coerce_mapping(candidates[0], path="candidates[0]")

        content = candidate.get("content")
        if content is None:
            return None
        parts = coerce_mapping(content, path="candidates[0].content").get("parts")
        if not parts:
            return None

        text = coerce_mapping(parts[0], path="candidates[0].content.parts[0]").get("text")
        if text is not None and not isinstance(text, str):
            msg = "Gemini API error: candidate text must be a string"
            raise ProviderError(msg)
        return text
