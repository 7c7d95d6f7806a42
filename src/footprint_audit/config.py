# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Settings model and YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_ENV_VAR = "FOOTPRINT_AUDIT_CONFIG"
DEFAULT_API_KEY_ENV_VAR = "OPENAI_API_KEY"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# ---------------------------------------------------------------------------
# Credential handling
# ---------------------------------------------------------------------------

class CredentialRef(BaseModel):
    """Reference to credentials: an env var, a file path, or an inline value."""

    env_var: Optional[str] = Field(
        default=DEFAULT_API_KEY_ENV_VAR, description="Environment variable name"
    )
    file_path: Optional[str] = Field(default=None, description="Path to credentials file")
    value: Optional[str] = Field(default=None, description="Inline value (dev only)")

    def resolve(self) -> str:
        """Resolve the credential to a plain string."""
        if self.env_var:
            val = os.environ.get(self.env_var)
            if val:
                return val
        if self.file_path:
            path = Path(self.file_path).expanduser()
            if path.exists():
                return path.read_text().strip()
        if self.value:
            return self.value
        raise ValueError(
            "Could not resolve credential: none of env_var, file_path, or value produced a result"
        )


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------

class ProviderSettings(BaseModel):
    """Connection settings for the generative text provider."""

    enabled: bool = Field(default=True)
    api_key: CredentialRef = Field(default_factory=CredentialRef)
    base_url: str = Field(default="https://api.openai.com/v1")
    model: str = Field(default="gpt-4o-mini")
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=2000, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    """Top-level settings, loaded from YAML or left at defaults."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    reference_dir: Optional[str] = Field(
        default=None,
        description="Directory overriding the bundled reference tables",
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, v: object) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


def load_settings(path: str | Path | None = None) -> Settings:
    """Load :class:`Settings` from a YAML file.

    With no *path*, the ``FOOTPRINT_AUDIT_CONFIG`` environment variable is
    consulted; when that is unset too, defaults are returned.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return Settings()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return Settings.model_validate(raw)
