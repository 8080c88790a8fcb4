"""Reporter base classes."""

from reporthub.reporters.base import ReporterBase

__all__ = ["ReporterBase"]
