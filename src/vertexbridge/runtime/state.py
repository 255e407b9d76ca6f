"""State primitives tracked while streaming model responses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ResponseState:
    """Aggregated text and token usage for a single response."""

    fragments: list[str] = field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0
    usage_reports: int = 0

    @property
    def text(self) -> str:
        return "".join(self.fragments)

    def snapshot(self) -> ResponseState:
        """Return a detached copy of the current state."""

        return ResponseState(
            fragments=list(self.fragments),
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            usage_reports=self.usage_reports,
        )
