"""Configuration: per-reporter configs with lazy output, hub console/host settings."""

from reporthub.config.reporter import ReporterConfig
from reporthub.config.schema import HubConfig, cfg

__all__ = ["HubConfig", "ReporterConfig", "cfg"]
