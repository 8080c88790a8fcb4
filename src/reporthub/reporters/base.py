"""Base reporter (thin convenience class; reporters need not inherit it)."""

from __future__ import annotations

from typing import Any

from reporthub.config.reporter import ReporterConfig


class ReporterBase:
    """Stores the config and exposes its console and output.

    Subclasses add event handlers named after the events they care about
    (``testStart``, ``suiteEnd``, ...). The manager only calls handlers that
    exist, so no event method is defined here.
    """

    def __init__(self, config: ReporterConfig | None = None) -> None:
        self.config = config if config is not None else ReporterConfig()

    @property
    def console(self) -> Any:
        return self.config.get("console")

    @property
    def output(self) -> Any:
        return self.config.output
