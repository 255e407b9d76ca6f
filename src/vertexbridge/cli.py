"""Command line interface for streaming Vertex AI responses."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from .config import ProviderConfig
from .core.adapters import ModelAdapter, TextEvent, VertexAdapter
from .core.errors import AdapterError
from .core.message import Message
from .core.models import VERTEX_DEFAULT_MODEL_ID, VERTEX_MODELS
from .runtime import ResponseRuntime

_LOG_LEVELS = ["debug", "info", "warning", "error"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stream Claude and Gemini responses from Vertex AI")
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="warning",
        help="Logging verbosity written to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("models", help="list the known Vertex AI models")

    chat_parser = subparsers.add_parser("chat", help="stream a single response to stdout")
    chat_parser.add_argument("prompt", help="User message sent to the model")
    chat_parser.add_argument("--system", default="", help="System prompt for Claude models")
    chat_parser.add_argument("--project", help="Google Cloud project id (defaults to the environment)")
    chat_parser.add_argument("--region", help="Vertex AI region (defaults to the environment)")
    chat_parser.add_argument("--model", help="Model id; unknown ids fall back to the default model")

    return parser


def _handle_models(args: argparse.Namespace) -> int:
    for model_id, info in VERTEX_MODELS.items():
        marker = " (default)" if model_id == VERTEX_DEFAULT_MODEL_ID else ""
        max_tokens = info.max_tokens if info.max_tokens is not None else "-"
        print(f"{model_id}\t{info.family.value}\tmax_tokens={max_tokens}{marker}")
    return 0


async def _stream_chat(adapter: ModelAdapter, system_prompt: str, prompt: str) -> ResponseRuntime:
    runtime = ResponseRuntime(adapter, system_prompt, [Message.user(prompt)])
    try:
        async for event in runtime:
            if isinstance(event, TextEvent) and event.text:
                sys.stdout.write(event.text)
                sys.stdout.flush()
    finally:
        await runtime.aclose()
    return runtime


def build_adapter(config: ProviderConfig) -> ModelAdapter:
    return VertexAdapter(config)


def _handle_chat(args: argparse.Namespace) -> int:
    config = ProviderConfig.from_env().merged(
        project_id=args.project,
        region=args.region,
        model_id=args.model,
    )
    try:
        adapter = build_adapter(config)
        runtime = asyncio.run(_stream_chat(adapter, args.system, args.prompt))
    except (AdapterError, ValueError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    except Exception as exc:
        # Claude-path SDK and credential errors arrive unwrapped.
        sys.stderr.write(f"error: {type(exc).__name__}: {exc}\n")
        return 1

    if runtime.state.text and not runtime.state.text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stderr.write(
        f"[{runtime.model.id}] input_tokens={runtime.state.input_tokens} "
        f"output_tokens={runtime.state.output_tokens} cost=${runtime.cost:.6f}\n"
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.command == "models":
        return _handle_models(args)
    if args.command == "chat":
        return _handle_chat(args)
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
