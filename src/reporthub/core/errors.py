"""Reporter hub exceptions."""

from __future__ import annotations


class ReporterError(Exception):
    """Base for reporter hub errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class ReporterConfigurationError(ReporterError):
    """Config validation failure or a reporter that could not be constructed."""


class OutputClosedError(ReporterError):
    """Write attempted on an output sink that was already ended."""
