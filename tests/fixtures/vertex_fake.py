"""Deterministic Anthropic and Gen AI streaming fixtures for offline adapter tests."""

from __future__ import annotations

import asyncio
from collections import deque
from types import SimpleNamespace
from typing import Any, Deque, Iterable, Mapping, Sequence

StreamChunk = Mapping[str, Any] | BaseException


class FakeAsyncStream:
    """Async iterator that replays pre-defined chunks.

    Exceptions placed among the chunks are raised when reached.
    """

    def __init__(self, chunks: Iterable[StreamChunk]) -> None:
        self._chunks: Deque[Any] = deque(chunks)
        self.closed = False
        self.pulled = 0

    def __aiter__(self) -> "FakeAsyncStream":
        return self

    async def __anext__(self) -> Any:
        if not self._chunks:
            raise StopAsyncIteration
        await asyncio.sleep(0)
        item = self._chunks.popleft()
        self.pulled += 1
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class FakeMessages:
    """Minimal stub for ``AsyncAnthropicVertex.messages``."""

    def __init__(self, stream: FakeAsyncStream, *, error: BaseException | None = None) -> None:
        self._stream = stream
        self._error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> FakeAsyncStream:
        self.calls.append(dict(kwargs))
        if self._error is not None:
            raise self._error
        return self._stream


class FakeModels:
    """Minimal stub for ``genai.Client.aio.models``."""

    def __init__(self, stream: FakeAsyncStream, *, error: BaseException | None = None) -> None:
        self._stream = stream
        self._error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_content_stream(self, **kwargs: Any) -> FakeAsyncStream:
        self.calls.append(dict(kwargs))
        if self._error is not None:
            raise self._error
        return self._stream


def build_anthropic_client(
    chunks: Sequence[StreamChunk] = (),
    *,
    error: BaseException | None = None,
) -> tuple[SimpleNamespace, FakeAsyncStream]:
    """Return a fake Anthropic Vertex client and the stream it serves."""

    stream = FakeAsyncStream(chunks)
    client = SimpleNamespace(messages=FakeMessages(stream, error=error))
    return client, stream


def build_genai_client(
    chunks: Sequence[StreamChunk] = (),
    *,
    error: BaseException | None = None,
) -> tuple[SimpleNamespace, FakeAsyncStream]:
    """Return a fake Gen AI client and the stream it serves."""

    stream = FakeAsyncStream(chunks)
    client = SimpleNamespace(aio=SimpleNamespace(models=FakeModels(stream, error=error)))
    return client, stream


def message_start(input_tokens: int | None, output_tokens: int | None) -> dict[str, Any]:
    return {
        "type": "message_start",
        "message": {
            "id": "msg_01",
            "role": "assistant",
            "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
        },
    }


def text_block_start(index: int, text: str) -> dict[str, Any]:
    return {"type": "content_block_start", "index": index, "content_block": {"type": "text", "text": text}}


def text_delta(index: int, text: str) -> dict[str, Any]:
    return {"type": "content_block_delta", "index": index, "delta": {"type": "text_delta", "text": text}}


def message_delta(output_tokens: int | None) -> dict[str, Any]:
    return {
        "type": "message_delta",
        "delta": {"stop_reason": "end_turn"},
        "usage": {"output_tokens": output_tokens},
    }


def hello_world_chunks() -> list[dict[str, Any]]:
    """Anthropic events for a single text block response."""

    return [
        message_start(10, 0),
        text_block_start(0, "Hello"),
        text_delta(0, " world"),
        {"type": "content_block_stop", "index": 0},
        message_delta(2),
        {"type": "message_stop"},
    ]


def two_block_chunks() -> list[dict[str, Any]]:
    """Anthropic events for a response made of two text blocks."""

    return [
        message_start(8, 1),
        text_block_start(0, "First"),
        text_delta(0, " block"),
        {"type": "content_block_stop", "index": 0},
        text_block_start(1, "Second"),
        text_delta(1, " block"),
        {"type": "content_block_stop", "index": 1},
        message_delta(5),
        {"type": "message_stop"},
    ]


def gemini_chunk(text: str | None) -> dict[str, Any]:
    """A Gen AI response chunk with one candidate, or none when ``text`` is None."""

    if text is None:
        return {"candidates": [{"content": {"role": "model", "parts": []}}]}
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


__all__ = [
    "FakeAsyncStream",
    "FakeMessages",
    "FakeModels",
    "build_anthropic_client",
    "build_genai_client",
    "gemini_chunk",
    "hello_world_chunks",
    "message_delta",
    "message_start",
    "text_block_start",
    "text_delta",
    "two_block_chunks",
]
