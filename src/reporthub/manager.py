"""Reporter manager: fans engine events out to registered reporters.

Events emitted while no reporter is registered are buffered and replayed by
``run()``. A failing reporter is logged and skipped; it never affects the
caller or the other reporters.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Mapping
from typing import Any

from loguru import logger

from reporthub.config.reporter import ReporterConfig
from reporthub.config.schema import HubConfig, cfg
from reporthub.console import Console, NullConsole, default_console
from reporthub.core.constants import DESTROY, EVENT_NAMES, FATAL_ERROR, RUN, HostKind
from reporthub.core.errors import ReporterConfigurationError
from reporthub.events import EarlyEvent, get_handler, is_known_event, mark_reported
from reporthub.legacy import LegacyReporter
from reporthub.output import detect_host, output_factory


def _is_factory(reporter: Any) -> bool:
    if isinstance(reporter, type):
        return True
    if not callable(reporter):
        return False
    return not any(get_handler(reporter, name) is not None for name in EVENT_NAMES)


class _Entry:
    """One registry slot. Identity, not reporter equality, decides removal."""

    __slots__ = ("reporter",)

    def __init__(self, reporter: object) -> None:
        self.reporter = reporter

    def __repr__(self) -> str:
        return f"_Entry({self.reporter!r})"


class ReporterHandle:
    """Returned by ``ReporterManager.add``; removes that registration once."""

    def __init__(self, manager: ReporterManager, entry: _Entry) -> None:
        self._manager = manager
        self._entry: _Entry | None = entry

    @property
    def reporter(self) -> object | None:
        return self._entry.reporter if self._entry is not None else None

    @property
    def removed(self) -> bool:
        return self._entry is None

    def remove(self) -> Any:
        """Detach the reporter and call its ``destroy``. Later calls do nothing."""
        entry, self._entry = self._entry, None
        if entry is None:
            return None
        if not self._manager._detach(entry):
            # Already torn down by ReporterManager.empty
            return None
        teardown = get_handler(entry.reporter, DESTROY)
        return teardown() if teardown is not None else None


class ReporterManager:
    """Registry of reporters plus the buffer of events emitted before any exists."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        host: HostKind | None = None,
        document: Any = None,
    ) -> None:
        self.console: Console = console if console is not None else default_console()
        self.host: HostKind = host or detect_host()
        self._document = document
        self._reporters: list[_Entry] = []
        self._early_events: list[EarlyEvent] = []

    @classmethod
    def from_config(cls, config: HubConfig | None = None, **kwargs: Any) -> ReporterManager:
        """Build a manager using the console/host choices of a HubConfig (default: cfg)."""
        config = config if config is not None else cfg
        if "console" not in kwargs and not config.console_enabled:
            kwargs["console"] = NullConsole()
        if "host" not in kwargs and config.host:
            kwargs["host"] = config.host
        return cls(**kwargs)

    @property
    def reporters(self) -> tuple[object, ...]:
        return tuple(entry.reporter for entry in self._reporters)

    @property
    def early_events(self) -> tuple[EarlyEvent, ...]:
        return tuple(self._early_events)

    def add(self, reporter: Any, config: Any = None) -> ReporterHandle:
        """Register a reporter.

        ``reporter`` may be a legacy topic mapping (wrapped in
        ``LegacyReporter``), a reporter class or factory (constructed with a
        ``ReporterConfig`` derived from ``config``), or a ready instance.
        Any callable without event handlers of its own counts as a factory,
        so ``functools.partial`` objects and factory instances work too.
        """
        if isinstance(reporter, Mapping):
            instance: object = LegacyReporter(reporter)
        elif _is_factory(reporter):
            instance = self._construct(reporter, config)
        else:
            instance = reporter

        entry = _Entry(instance)
        self._reporters.append(entry)
        logger.debug("Registered reporter {} ({} active)", instance, len(self._reporters))
        return ReporterHandle(self, entry)

    def _construct(self, factory: Any, config: Any) -> object:
        reporter_config = ReporterConfig(
            config,
            output_factory=output_factory(self.host, self._document),
            console=self.console,
        )
        try:
            return factory(reporter_config)
        except Exception as exc:
            name = getattr(factory, "__name__", repr(factory))
            raise ReporterConfigurationError(
                f"Could not construct reporter {name}: {exc}",
                code="reporter_construction_failed",
                details={"reporter": name},
                original_error=exc,
            ) from exc

    def _detach(self, entry: _Entry) -> bool:
        if not any(e is entry for e in self._reporters):
            return False
        self._reporters = [e for e in self._reporters if e is not entry]
        logger.debug("Removed reporter {} ({} active)", entry.reporter, len(self._reporters))
        return True

    async def empty(self) -> None:
        """Tear down and unregister every reporter. Buffered events are kept."""
        entries, self._reporters = self._reporters, []
        pending: list[tuple[object, Awaitable[Any]]] = []
        for entry in entries:
            teardown = get_handler(entry.reporter, DESTROY)
            if teardown is None:
                continue
            try:
                result = teardown()
            except Exception as exc:
                logger.exception("Reporter {} failed handling {}: {}", entry.reporter, DESTROY, exc)
                continue
            if inspect.isawaitable(result):
                pending.append((entry.reporter, result))
        await self._settle(DESTROY, pending)

    async def emit(self, name: str, *args: Any) -> None:
        """Deliver an event to every reporter with a handler for it. Never raises."""
        await self._settle(name, self._dispatch(name, args))

    async def run(self) -> None:
        """Announce the run, then replay buffered events in emission order."""
        await self.emit(RUN)
        early, self._early_events = self._early_events, []
        if early:
            logger.debug("Replaying {} early events", len(early))
        pending: list[tuple[object, Awaitable[Any]]] = []
        for event in early:
            pending.extend(self._dispatch(event.name, event.args))
        await self._settle("early events", pending)

    def _dispatch(self, name: str, args: tuple[Any, ...]) -> list[tuple[object, Awaitable[Any]]]:
        """Call matching handlers synchronously; return the awaitables they produced."""
        if not self._reporters:
            self._early_events.append(EarlyEvent(name, args))
            logger.debug("No reporters yet; buffered {} ({} queued)", name, len(self._early_events))
            return []

        if not is_known_event(name):
            logger.debug("Emitting non-standard event {}", name)

        targets = []
        for entry in list(self._reporters):
            handler = get_handler(entry.reporter, name)
            if handler is not None:
                targets.append((entry.reporter, handler))

        # Upstream checks the flag to decide whether a fallback report is needed
        if name == FATAL_ERROR and args and args[0] is not None and targets:
            mark_reported(args[0])

        pending: list[tuple[object, Awaitable[Any]]] = []
        for reporter, handler in targets:
            try:
                result = handler(*args)
            except Exception as exc:
                logger.exception("Reporter {} failed handling {}: {}", reporter, name, exc)
                continue
            if inspect.isawaitable(result):
                pending.append((reporter, result))
        return pending

    @staticmethod
    async def _settle(name: str, pending: list[tuple[object, Awaitable[Any]]]) -> None:
        if not pending:
            return
        results = await asyncio.gather(*(aw for _, aw in pending), return_exceptions=True)
        for (reporter, _), result in zip(pending, results):
            if isinstance(result, Exception):
                logger.opt(exception=result).error(
                    "Reporter {} failed handling {}: {}", reporter, name, result
                )
