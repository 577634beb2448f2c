"""Configuration package — re-exports for convenience."""

from honeycomb_flows.config.loader import ConfigLoader
from honeycomb_flows.config.settings import Settings

__all__ = ["ConfigLoader", "Settings"]
