"""Event records and reporter capability helpers."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from reporthub.core.constants import EVENT_NAMES


@dataclass(frozen=True)
class EarlyEvent:
    """Event emitted before any reporter was registered; replayed by run()."""

    name: str
    args: tuple[Any, ...] = field(default_factory=tuple)


def get_handler(reporter: object, name: str) -> Callable[..., Any] | None:
    """Return the reporter's handler for event ``name``, or None if it has none.

    A reporter whose attribute lookup raises is treated as having no handler;
    the failure is logged like any other reporter failure.
    """
    try:
        handler = getattr(reporter, name, None)
    except Exception as exc:
        logger.exception("Reporter {} failed looking up {}: {}", reporter, name, exc)
        return None
    if handler is None or not callable(handler):
        return None
    return handler


def is_known_event(name: str) -> bool:
    """True when ``name`` belongs to the standard event vocabulary."""
    return name in EVENT_NAMES


def mark_reported(payload: object) -> None:
    """Flag a fatal error payload as delivered to at least one reporter."""
    if isinstance(payload, MutableMapping):
        payload["reported"] = True
        return
    try:
        payload.reported = True  # type: ignore[attr-defined]
    except (AttributeError, TypeError):
        logger.debug("Cannot mark {} payload as reported", type(payload).__name__)
