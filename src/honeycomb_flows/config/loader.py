"""ConfigLoader — YAML file per environment, env vars override."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from honeycomb_flows.config.settings import ENV_PREFIX, Settings

_CONFIG_ROOT = Path(__file__).resolve().parent


class ConfigLoader:
    """Load settings from YAML files with environment variable overrides."""

    @staticmethod
    def _load_yaml(env: str) -> dict[str, Any]:
        """Read config/<env>/settings.yaml; a missing or non-mapping file is empty."""
        path = _CONFIG_ROOT / env / "settings.yaml"
        data = yaml.safe_load(path.read_text()) if path.is_file() else None
        return data if isinstance(data, dict) else {}

    @staticmethod
    def load_settings(**overrides: Any) -> Settings:
        """Build Settings: overrides > env vars > YAML > defaults.

        HONEYCOMB_FLOWS_ENV selects the YAML directory (``dev`` by default).
        Keyword arguments outrank the environment in pydantic-settings, so a
        YAML key is passed through only when its env var is unset.
        """
        env = os.environ.get(f"{ENV_PREFIX}ENV", "dev")
        from_yaml = {
            key: value
            for key, value in ConfigLoader._load_yaml(env).items()
            if f"{ENV_PREFIX}{key.upper()}" not in os.environ
        }
        return Settings(**{**from_yaml, **overrides})
