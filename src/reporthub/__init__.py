"""Event broadcast hub between a test engine and its reporters."""

from reporthub.console import LoguruConsole, NullConsole
from reporthub.core.constants import EVENT_NAMES
from reporthub.core.errors import OutputClosedError, ReporterConfigurationError, ReporterError
from reporthub.legacy import LegacyReporter
from reporthub.manager import ReporterHandle, ReporterManager

__version__ = "0.1.0"

__all__ = [
    "EVENT_NAMES",
    "LegacyReporter",
    "LoguruConsole",
    "NullConsole",
    "OutputClosedError",
    "ReporterConfigurationError",
    "ReporterError",
    "ReporterHandle",
    "ReporterManager",
    "__version__",
]
