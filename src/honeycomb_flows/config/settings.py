"""Settings model — pydantic-settings with env var support."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings

ENV_PREFIX = "HONEYCOMB_FLOWS_"


class Settings(BaseSettings):
    """Service settings.

    Use ``ConfigLoader.load_settings()`` to build with YAML + env var layering.
    Direct construction (e.g. in tests) skips YAML loading.
    """

    api_key: str = ""
    api_base_url: str = "https://api.honeycomb.io"
    public_url: str = "http://localhost:8000"
    database_url: str = "sqlite+aiosqlite:///honeycomb_flows.db"
    request_timeout_seconds: float = 10.0
    query_max_duration_seconds: float = 15.0
    query_poll_interval_seconds: float = 0.5
    webhook_secret_source: Literal["query", "header"] = "query"
    webhook_name_prefix: str = "honeycomb-flows"
    log_level: str = "INFO"

    model_config = {"env_prefix": ENV_PREFIX}
