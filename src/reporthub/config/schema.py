"""Hub settings: console and host choices for ReporterManager.from_config."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from reporthub.core.constants import HOSTS, HostKind
from reporthub.core.errors import ReporterConfigurationError

# Env keys that override settings (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "REPORTHUB_CONSOLE",
    "REPORTHUB_HOST",
)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


def _parse_bool_env(val: str) -> bool | None:
    """Parse env string to bool; None if not a recognized bool."""
    v = val.lower()
    if v in ("1", "true", "yes"):
        return True
    if v in ("0", "false", "no"):
        return False
    return None


class HubConfig:
    """Whether reporters get a real console, and which host their output targets."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace settings data."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Hub settings reloaded: console={} host={}", self.console_enabled, self.host)

    def _validate(self) -> None:
        host = self._data.get("host")
        if host is not None and host not in HOSTS:
            raise ReporterConfigurationError(
                f"host must be one of {', '.join(HOSTS)}",
                code="invalid_host",
                details={"host": host},
            )

    @property
    def console_enabled(self) -> bool:
        parsed = _parse_bool_env(self._env.get("REPORTHUB_CONSOLE", ""))
        if parsed is not None:
            return parsed
        return bool(self._data.get("console", True))

    @property
    def host(self) -> HostKind | None:
        val = self._env.get("REPORTHUB_HOST") or self._data.get("host")
        return val if val in HOSTS else None


cfg = HubConfig()
