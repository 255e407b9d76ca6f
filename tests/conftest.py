from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

from vertexbridge.config import ProviderConfig

from tests.fixtures import vertex_fake

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def patch_vendor_clients(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep adapters built without injected clients away from the real SDKs."""

    def _anthropic_client(_config: ProviderConfig) -> Any:
        client, _stream = vertex_fake.build_anthropic_client()
        return client

    def _genai_client(_config: ProviderConfig) -> Any:
        client, _stream = vertex_fake.build_genai_client()
        return client

    monkeypatch.setattr("vertexbridge.core.adapters.vertex.create_anthropic_client", _anthropic_client)
    monkeypatch.setattr("vertexbridge.core.adapters.vertex.create_genai_client", _genai_client)
