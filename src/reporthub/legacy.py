"""Adapter for legacy topic-keyed reporter definitions.

Old reporters were plain mappings of pub/sub topics to callbacks, e.g.
``{"/test/start": on_start, "/error": on_error, "stop": close}``. A
``LegacyReporter`` resolves every topic to an event name once, at
construction, and answers to those event names as methods so the manager can
treat it like any other reporter.
"""

from __future__ import annotations

import asyncio
import inspect
import re
from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

# Topics whose event name cannot be derived from the topic itself
TOPIC_TO_EVENT: dict[str, str] = {
    "/test/new": "newTest",
    "/suite/new": "newSuite",
    "/client/end": "runEnd",
    "/error": "fatalError",
    "/runner/end": "runEnd",
    "/runner/start": "runStart",
    "/tunnel/stop": "tunnelEnd",
    "start": "run",
    "stop": "destroy",
}

_SEGMENT_RE = re.compile(r"/(\w)")


def topic_to_event_name(topic: str) -> str | None:
    """Resolve a legacy topic to an event name; None if it is not a topic.

    ``/suite/error`` -> ``suiteError``, ``/tunnel/download/progress`` ->
    ``tunnelDownloadProgress``.
    """
    if topic in TOPIC_TO_EVENT:
        return TOPIC_TO_EVENT[topic]
    if topic.startswith("/"):
        return _SEGMENT_RE.sub(lambda m: m.group(1).upper(), topic[1:])
    return None


async def _await_all(results: list[Any]) -> None:
    await asyncio.gather(*(r for r in results if inspect.isawaitable(r)))


class LegacyReporter:
    """Reporter wrapping a topic -> callback mapping."""

    def __init__(self, topic_map: Mapping[str, Callable[..., Any]]) -> None:
        self.topic_map = topic_map
        self._handlers: dict[str, list[Callable[..., Any]]] = {}

        for topic, callback in topic_map.items():
            name = topic_to_event_name(topic)
            if name is None:
                logger.debug("Legacy reporter: ignoring unrecognized topic {}", topic)
                continue
            self._handlers.setdefault(name, []).append(callback)
            logger.debug("Legacy reporter: {} -> {}", topic, name)

    @property
    def events(self) -> frozenset[str]:
        """Event names this adapter answers to."""
        return frozenset(self._handlers)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        handlers = self.__dict__.get("_handlers", {})
        if name not in handlers:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self._delegate(handlers[name])

    @staticmethod
    def _delegate(callbacks: list[Callable[..., Any]]) -> Callable[..., Any]:
        if len(callbacks) == 1:
            return callbacks[0]

        def invoke(*args: Any) -> Any:
            results = [callback(*args) for callback in callbacks]
            if any(inspect.isawaitable(r) for r in results):
                return _await_all(results)
            return None

        return invoke

    def __repr__(self) -> str:
        return f"LegacyReporter({sorted(self._handlers)})"
