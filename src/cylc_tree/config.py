"""Configuration for the tree builder.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Nothing here is required: the builder works on the data it is given, so every
setting has a usable default.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TreeSettings(BaseSettings):
    """Settings for the CLI and REST server.

    Environment variables:
    - LOG_LEVEL              (optional)
    - CYLC_TREE_CHECKPOINT   (optional)
    - CYLC_TREE_CORS_ORIGINS (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TreeSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    checkpoint_path: Path | None = Field(
        default=None,
        validation_alias="CYLC_TREE_CHECKPOINT",
        description=(
            "JSON checkpoint ({'workflows': [...]}) served by the mock workflow service. "
            "The bundled checkpoint is used when unset."
        ),
    )

    # Dev-friendly CORS for a UI dev server. Override via CYLC_TREE_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="http://localhost:8080,http://127.0.0.1:8080",
        validation_alias="CYLC_TREE_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
