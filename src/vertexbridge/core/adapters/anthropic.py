"""Claude on Vertex AI streaming through the Anthropic SDK."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import AdapterError
from ..message import Message
from ..models import ModelDescriptor
from .stream import (
    ProviderStreamIterator,
    StreamEvent,
    StreamNormalizer,
    TextEvent,
    UsageEvent,
    coerce_mapping,
)
from .utils import messages_to_anthropic

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 8192


def create_anthropic_stream(client: Any, payload: Mapping[str, Any]) -> Any:
    """Issue a streaming Messages API request with the provided client."""

    return client.messages.create(**payload)


def build_anthropic_payload(
    model: ModelDescriptor,
    system_prompt: str,
    messages: Sequence[Message],
) -> dict[str, Any]:
    return {
        "model": model.id,
        "max_tokens": model.info.max_tokens or DEFAULT_MAX_TOKENS,
        "temperature": 0,
        "system": system_prompt,
        "messages": messages_to_anthropic(messages),
        "stream": True,
    }


class AnthropicStreamIterator(ProviderStreamIterator):
    """Stream iterator that converts Anthropic stream events into canonical events.

    Errors raised by the Anthropic client propagate unchanged.
    """

    provider_name = "Anthropic"

    def __init__(
        self,
        client: Any,
        payload: Mapping[str, Any],
        *,
        normalizer: StreamNormalizer | None = None,
    ) -> None:
        self.payload = dict(payload)
        super().__init__(
            lambda: create_anthropic_stream(client, self.payload),
            normalizer or AnthropicStreamNormalizer(),
        )


class AnthropicStreamNormalizer(StreamNormalizer):
    """Normalize raw Messages API stream events into canonical events.

    Only message start/delta usage and text content blocks carry content the
    caller needs; every other event or delta kind is skipped.
    """

    async def normalize_chunk(self, chunk: Mapping[str, Any]) -> list[StreamEvent]:
        chunk_type = chunk.get("type")

        if chunk_type == "message_start":
            message = self._optional_mapping(chunk.get("message"), path="message")
            usage = self._optional_mapping(message.get("usage"), path="message.usage")
            return [
                UsageEvent(
                    input_tokens=self._token_count(usage, "input_tokens"),
                    output_tokens=self._token_count(usage, "output_tokens"),
                )
            ]

        if chunk_type == "message_delta":
            usage = self._optional_mapping(chunk.get("usage"), path="usage")
            return [UsageEvent(input_tokens=0, output_tokens=self._token_count(usage, "output_tokens"))]

        if chunk_type == "content_block_start":
            block = self._optional_mapping(chunk.get("content_block"), path="content_block")
            if block.get("type") != "text":
                return []
            events: list[StreamEvent] = []
            if self._block_index(chunk) > 0:
                events.append(TextEvent(text="\n"))
            events.append(TextEvent(text=self._text(block, path="content_block.text")))
            return events

        if chunk_type == "content_block_delta":
            delta = self._optional_mapping(chunk.get("delta"), path="delta")
            if delta.get("type") != "text_delta":
                return []
            return [TextEvent(text=self._text(delta, path="delta.text"))]

        LOGGER.debug("ignoring Anthropic stream event type=%s", chunk_type)
        return []

    def _optional_mapping(self, value: Any, *, path: str) -> Mapping[str, Any]:
        if value is None:
            return {}
        return coerce_mapping(value, path=path)

    def _token_count(self, usage: Mapping[str, Any], key: str) -> int:
        value = usage.get(key)
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"usage.{key} must be an integer when provided"
            raise AdapterError(msg)
        return value

    def _block_index(self, chunk: Mapping[str, Any]) -> int:
        index = chunk.get("index", 0)
        if isinstance(index, bool) or not isinstance(index, int):
            msg = "content_block_start index must be an integer"
            raise AdapterError(msg)
        return index

    def _text(self, payload: Mapping[str, Any], *, path: str) -> str:
        text = payload.get("text")
        if text is None:
            return ""
        if not isinstance(text, str):
            msg = f"{path} must be a string"
            raise AdapterError(msg)
        return text
