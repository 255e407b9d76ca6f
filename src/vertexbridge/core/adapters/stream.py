"""Canonical streaming event schema and base iterator primitives."""

from __future__ import annotations

import abc
import asyncio
import inspect
import logging
from asyncio import CancelledError
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Deque, Dict, List, Protocol, Union

from ..errors import AdapterError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextEvent:
    """A fragment of generated text to append to the response."""

    text: str


@dataclass(frozen=True, slots=True)
class UsageEvent:
    """Token accounting reported by the provider.

    Providers may report usage several times per response, for example the
    input tokens once when the message starts and output tokens as the
    response grows, so consumers are expected to sum the events.
    """

    input_tokens: int
    output_tokens: int


StreamEvent = Union[TextEvent, UsageEvent]


class StreamNormalizer(Protocol):
    async def normalize_chunk(self, chunk: Dict[str, Any]) -> List[StreamEvent]:
        """Map a provider-specific chunk into canonical stream events."""


class BaseStreamIterator(AsyncIterator[StreamEvent], metaclass=abc.ABCMeta):
    """Shared async iterator driving provider-specific streaming adapters.

    Subclasses are responsible for sourcing raw provider chunks by
    implementing :meth:`_get_next_chunk`. Each chunk is normalized into zero or
    more :class:`StreamEvent` instances via a :class:`StreamNormalizer`. The
    iterator buffers normalized events so consumers receive a linear stream of
    canonical event objects regardless of how providers batch their updates.

    The iterator closes itself when the provider stream is exhausted or when
    fetching or normalizing a chunk raises; callers that stop consuming early
    should call :meth:`close` (or use :func:`replay_stream`).
    """

    def __init__(self, normalizer: StreamNormalizer) -> None:
        self._normalizer = normalizer
        self._buffer: Deque[StreamEvent] = deque()
        self._closed = False
        self._close_lock = asyncio.Lock()

    def __aiter__(self) -> BaseStreamIterator:
        return self

    async def __anext__(self) -> StreamEvent:
        buffered = self._pop_buffered_event()
        if buffered is not None:
            return buffered

        while True:
            if self._closed:
                raise StopAsyncIteration

            chunk = await self._consume_chunk()
            try:
                events = await self._normalizer.normalize_chunk(chunk)
            except Exception:
                await self.close()
                raise
            if not events:
                continue

            self._buffer.extend(events)
            buffered = self._pop_buffered_event()
            if buffered is not None:
                return buffered

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Release provider resources and prevent additional iteration."""

        async with self._close_lock:
            if self._closed:
                return

            self._closed = True
            self._buffer.clear()
            await self._on_close()

    async def aclose(self) -> None:
        await self.close()

    async def _consume_chunk(self) -> Dict[str, Any]:
        try:
            return await self._get_next_chunk()
        except (Exception, CancelledError):
            # StopAsyncIteration included: exhaustion and failures both release the stream.
            await self.close()
            raise

    def _pop_buffered_event(self) -> StreamEvent | None:
        if not self._buffer:
            return None
        return self._buffer.popleft()

    @abc.abstractmethod
    async def _get_next_chunk(self) -> Dict[str, Any]:
        """Retrieve the next raw chunk from the provider stream."""

    async def _on_close(self) -> None:
        """Allow subclasses to dispose provider resources when closing."""


class ProviderStreamIterator(BaseStreamIterator):
    """Stream iterator reading chunks from a vendor SDK response stream.

    The vendor request is not issued until the first event is requested:
    ``opener`` is called lazily and may return either the stream itself or an
    awaitable resolving to it.
    """

    provider_name = "provider"

    def __init__(
        self,
        opener: Callable[[], Any | Awaitable[Any]],
        normalizer: StreamNormalizer,
    ) -> None:
        self._opener = opener
        self._stream: Any = None
        self._iterator: Any = None
        self._stream_closed = False
        super().__init__(normalizer)

    async def _get_next_chunk(self) -> Dict[str, Any]:
        if self._iterator is None:
            await self._open()
        raw_chunk = await self._iterator.__anext__()
        return coerce_mapping(raw_chunk, path=f"{self.provider_name} stream chunk")

    async def _open(self) -> None:
        LOGGER.debug("opening %s stream", self.provider_name)
        stream = self._opener()
        if inspect.isawaitable(stream):
            stream = await stream
        self._stream = stream
        self._iterator = self._coerce_async_iterator(stream)

    async def _on_close(self) -> None:
        if self._stream_closed or self._stream is None:
            return
        self._stream_closed = True

        for closer_name in ("aclose", "close"):
            closer = getattr(self._stream, closer_name, None)
            if closer is None:
                continue
            result = closer()
            if inspect.isawaitable(result):
                await result
            LOGGER.debug("closed %s stream", self.provider_name)
            return

    def _coerce_async_iterator(self, stream: Any) -> Any:
        iterator_factory = getattr(stream, "__aiter__", None)
        if iterator_factory is None or not callable(iterator_factory):
            msg = f"{self.provider_name} stream must support async iteration"
            raise AdapterError(msg)
        iterator = iterator_factory()
        if not hasattr(iterator, "__anext__"):
            msg = f"{self.provider_name} stream iterator must define '__anext__'"
            raise AdapterError(msg)
        return iterator


def coerce_mapping(value: Any, *, path: str) -> Dict[str, Any]:
    """Return ``value`` as a plain dictionary, dumping SDK models when needed."""

    if isinstance(value, Mapping):
        return dict(value)

    if hasattr(value, "model_dump"):
        mapping = value.model_dump()
        if isinstance(mapping, Mapping):
            return dict(mapping)

    if hasattr(value, "__dict__"):
        return dict(vars(value))

    msg = f"{path} must be a mapping"
    raise AdapterError(msg)


async def replay_stream(iterator: BaseStreamIterator) -> List[StreamEvent]:
    """Collect all events emitted by a stream iterator."""

    events: List[StreamEvent] = []
    try:
        async for event in iterator:
            events.append(event)
    finally:
        await iterator.close()
    return events


def replay_text(events: List[StreamEvent]) -> str:
    """Concatenate the text fragments of a collected event sequence."""

    return "".join(event.text for event in events if isinstance(event, TextEvent))
