"""Async runtime loop coordinating an adapter stream, response state, and transcripts."""

from __future__ import annotations

import logging
from asyncio import CancelledError
from collections.abc import AsyncIterator, Sequence

from vertexbridge.core.adapters import ModelAdapter
from vertexbridge.core.adapters.stream import (
    BaseStreamIterator,
    StreamEvent,
    TextEvent,
    UsageEvent,
)
from vertexbridge.core.message import Message
from vertexbridge.core.models import ModelDescriptor, calculate_cost

from .state import ResponseState


LOGGER = logging.getLogger(__name__)


class SessionTranscript:
    """Buffer of streaming events and state snapshots for deterministic replay."""

    def __init__(self) -> None:
        self._events: list[StreamEvent] = []
        self._states: list[ResponseState] = []

    def record(self, event: StreamEvent, state: ResponseState) -> None:
        """Append an event alongside a snapshot of the response state."""

        self._events.append(event)
        self._states.append(state.snapshot())

    @property
    def events(self) -> tuple[StreamEvent, ...]:
        """Return the recorded events in emission order."""

        return tuple(self._events)

    @property
    def states(self) -> tuple[ResponseState, ...]:
        """Return state snapshots for each recorded event."""

        return tuple(self._states)

    def __len__(self) -> int:
        return len(self._events)

    async def replay(self) -> AsyncIterator[StreamEvent]:
        """Yield recorded events as an async iterator."""

        for event in self._events:
            yield event


class ResponseRuntime(AsyncIterator[StreamEvent]):
    """Drive ``create_message`` while accumulating text and usage.

    Events are forwarded to the caller unchanged. The adapter stream is
    opened on the first pull and closed on exhaustion, cancellation, error
    or an explicit :meth:`aclose`.
    """

    def __init__(
        self,
        adapter: ModelAdapter,
        system_prompt: str,
        messages: Sequence[Message],
        /,
        *,
        transcript: SessionTranscript | None = None,
    ) -> None:
        self._adapter = adapter
        self._system_prompt = system_prompt
        self._messages = tuple(messages)
        self._stream: BaseStreamIterator | None = None
        self._closed = False
        self._completed = False

        self.model: ModelDescriptor = adapter.get_model()
        self.state = ResponseState()
        self.transcript = transcript or SessionTranscript()

    def __aiter__(self) -> ResponseRuntime:
        return self

    async def __anext__(self) -> StreamEvent:
        if self._closed:
            raise StopAsyncIteration

        iterator = self._ensure_stream()
        try:
            event = await iterator.__anext__()
        except StopAsyncIteration:
            self._completed = True
            self.on_complete()
            await self.aclose()
            raise
        except CancelledError:
            await self.aclose()
            raise
        except Exception:
            LOGGER.warning(
                "stream failed model=%s after %s events",
                self.model.id,
                len(self.transcript),
            )
            await self.aclose()
            raise

        self._handle_event(event)
        return event

    @property
    def closed(self) -> bool:
        """Whether the runtime has been closed."""

        return self._closed

    @property
    def completed(self) -> bool:
        """Whether the provider stream ran to its end."""

        return self._completed

    @property
    def cost(self) -> float:
        """Estimated USD cost of the tokens reported so far."""

        return calculate_cost(self.model.info, self.state.input_tokens, self.state.output_tokens)

    async def aclose(self) -> None:
        """Close the underlying stream iterator and mark the runtime closed."""

        if self._closed:
            return

        self._closed = True
        iterator = self._stream
        self._stream = None
        if iterator is None:
            return
        await iterator.close()

    def on_text(self, event: TextEvent) -> None:
        """Log text fragments emitted by the adapter."""

        LOGGER.debug("on_text length=%s text=%r", len(event.text), event.text)

    def on_usage(self, event: UsageEvent) -> None:
        """Log usage reports emitted by the adapter."""

        LOGGER.debug(
            "on_usage input_tokens=%s output_tokens=%s",
            event.input_tokens,
            event.output_tokens,
        )

    def on_complete(self) -> None:
        """Log completion of the streaming session."""

        LOGGER.info(
            "on_complete model=%s output_length=%s input_tokens=%s output_tokens=%s cost=%.6f",
            self.model.id,
            len(self.state.text),
            self.state.input_tokens,
            self.state.output_tokens,
            self.cost,
        )

    def _ensure_stream(self) -> BaseStreamIterator:
        if self._stream is None:
            self._stream = self._adapter.create_message(self._system_prompt, self._messages)
        return self._stream

    def _handle_event(self, event: StreamEvent) -> None:
        if isinstance(event, TextEvent):
            self.state.fragments.append(event.text)
            self.on_text(event)
        elif isinstance(event, UsageEvent):
            self.state.input_tokens += event.input_tokens
            self.state.output_tokens += event.output_tokens
            self.state.usage_reports += 1
            self.on_usage(event)
        else:  # pragma: no cover - defensive branch for future event types
            LOGGER.debug("Unhandled event type: %s", type(event).__name__)

        self.transcript.record(event, self.state)
