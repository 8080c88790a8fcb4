"""Event vocabulary and host constants."""

from __future__ import annotations

from typing import Literal, get_args

EventName = Literal[
    "coverage",
    "fatalError",
    "newSuite",
    "newTest",
    "proxyEnd",
    "proxyStart",
    "runEnd",
    "runStart",
    "run",
    "destroy",
    "suiteEnd",
    "suiteError",
    "suiteStart",
    "testEnd",
    "testPass",
    "testSkip",
    "testStart",
    "tunnelDownloadProgress",
    "tunnelEnd",
    "tunnelStart",
    "tunnelStatus",
]
EVENT_NAMES: tuple[str, ...] = get_args(EventName)

FATAL_ERROR = "fatalError"
RUN = "run"
DESTROY = "destroy"

# Console capability set handed to reporters (assert is a keyword, timeEnd is snake_cased)
CONSOLE_METHODS: tuple[str, ...] = (
    "assert_",
    "count",
    "dir",
    "error",
    "exception",
    "info",
    "log",
    "table",
    "time",
    "time_end",
    "trace",
    "warn",
)

HostKind = Literal["filesystem", "document"]
HOSTS: tuple[HostKind, ...] = ("filesystem", "document")
