"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import LogFormat, StoreBackend


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class StoreConfig(BaseModel):
    backend: StoreBackend = StoreBackend.MEMORY
    path: str = "data/events.jsonl"  # Only used by the jsonl backend


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    store: StoreConfig = Field(default_factory=StoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "ORDERS_", "env_nested_delimiter": "__"}

    def validate_store(self) -> None:
        """Reject store settings that cannot produce a working backend."""
        from .errors import ConfigError

        if self.store.backend == StoreBackend.JSONL and not self.store.path.strip():
            raise ConfigError(
                "The jsonl store backend requires a non-empty store.path."
            )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
