"""Console capability handed to reporters through their config.

Reporters never probe ambient globals for a console; the manager passes one
in. ``LoguruConsole`` forwards to loguru, ``NullConsole`` discards everything.
"""

from __future__ import annotations

import time
import traceback
from collections import Counter
from typing import Any, Protocol

from loguru import logger


class Console(Protocol):
    """Console-like capability set available as ``config.console``."""

    def assert_(self, condition: Any, *args: Any) -> None: ...
    def count(self, label: str = "default") -> None: ...
    def dir(self, obj: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def exception(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def log(self, *args: Any) -> None: ...
    def table(self, data: Any) -> None: ...
    def time(self, label: str = "default") -> None: ...
    def time_end(self, label: str = "default") -> None: ...
    def trace(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


class NullConsole:
    """No-op console for hosts without a logging facility."""

    def assert_(self, condition: Any, *args: Any) -> None:
        pass

    def count(self, label: str = "default") -> None:
        pass

    def dir(self, obj: Any) -> None:
        pass

    def error(self, *args: Any) -> None:
        pass

    def exception(self, *args: Any) -> None:
        pass

    def info(self, *args: Any) -> None:
        pass

    def log(self, *args: Any) -> None:
        pass

    def table(self, data: Any) -> None:
        pass

    def time(self, label: str = "default") -> None:
        pass

    def time_end(self, label: str = "default") -> None:
        pass

    def trace(self, *args: Any) -> None:
        pass

    def warn(self, *args: Any) -> None:
        pass


class LoguruConsole:
    """Console backed by the loguru logger."""

    def __init__(self, name: str = "console") -> None:
        self._log = logger.bind(console=name)
        self._counts: Counter[str] = Counter()
        self._timers: dict[str, float] = {}

    def assert_(self, condition: Any, *args: Any) -> None:
        if not condition:
            self._log.error("Assertion failed: {}", _join(args) or "console.assert")

    def count(self, label: str = "default") -> None:
        self._counts[label] += 1
        self._log.info("{}: {}", label, self._counts[label])

    def dir(self, obj: Any) -> None:
        self._log.info("{!r}", obj)

    def error(self, *args: Any) -> None:
        self._log.error("{}", _join(args))

    def exception(self, *args: Any) -> None:
        self._log.opt(exception=True).error("{}", _join(args))

    def info(self, *args: Any) -> None:
        self._log.info("{}", _join(args))

    def log(self, *args: Any) -> None:
        self._log.info("{}", _join(args))

    def table(self, data: Any) -> None:
        rows = data.items() if isinstance(data, dict) else enumerate(data)
        for key, value in rows:
            self._log.info("{} | {!r}", key, value)

    def time(self, label: str = "default") -> None:
        self._timers[label] = time.perf_counter()

    def time_end(self, label: str = "default") -> None:
        started = self._timers.pop(label, None)
        if started is None:
            self._log.warning("Timer '{}' does not exist", label)
            return
        self._log.info("{}: {:.3f}ms", label, (time.perf_counter() - started) * 1000)

    def trace(self, *args: Any) -> None:
        stack = "".join(traceback.format_stack()[:-1])
        self._log.debug("Trace: {}\n{}", _join(args), stack)

    def warn(self, *args: Any) -> None:
        self._log.warning("{}", _join(args))


def default_console() -> Console:
    """Console used when the caller does not supply one."""
    return LoguruConsole()
