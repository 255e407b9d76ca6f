"""Configuration for the Vertex AI provider adapter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

PROJECT_ENV_VARS = ("VERTEX_PROJECT_ID", "GOOGLE_CLOUD_PROJECT")
REGION_ENV_VARS = ("VERTEX_REGION", "CLOUD_ML_REGION", "GOOGLE_CLOUD_LOCATION")
MODEL_ENV_VARS = ("VERTEX_MODEL_ID",)


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Identifiers used to build the vendor clients and pick a model.

    Attributes
    ----------
    project_id:
        Google Cloud project hosting the Vertex AI endpoints.
    region:
        Vertex AI region, for example ``us-east5`` or ``europe-west1``. Both
        vendor clients are scoped to the same region.
    model_id:
        Requested model identifier. Unknown or missing identifiers fall back
        to the default model when the adapter resolves its model.
    """

    project_id: str | None = None
    region: str | None = None
    model_id: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderConfig":
        """Build a :class:`ProviderConfig` from environment variables.

        The first non-blank variable of each group wins:
        ``VERTEX_PROJECT_ID`` then ``GOOGLE_CLOUD_PROJECT`` for the project,
        ``VERTEX_REGION``, ``CLOUD_ML_REGION`` then ``GOOGLE_CLOUD_LOCATION``
        for the region, and ``VERTEX_MODEL_ID`` for the model.
        """

        env = os.environ if environ is None else environ
        return cls(
            project_id=_first_set(env, PROJECT_ENV_VARS),
            region=_first_set(env, REGION_ENV_VARS),
            model_id=_first_set(env, MODEL_ENV_VARS),
        )

    def merged(
        self,
        *,
        project_id: str | None = None,
        region: str | None = None,
        model_id: str | None = None,
    ) -> "ProviderConfig":
        """Return a copy where the provided non-empty values take precedence."""

        return ProviderConfig(
            project_id=project_id or self.project_id,
            region=region or self.region,
            model_id=model_id or self.model_id,
        )


def _first_set(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = env.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None
