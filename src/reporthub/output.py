"""Output sinks for reporters (``config.output``).

Which sink a reporter gets depends on the host: with a filesystem it is
either a file (when the reporter config names one) or stdout; in a
browser-hosted interpreter written text is collected into a ``<pre>``
element that is attached to the page when the output ends.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any, Protocol

from loguru import logger

from reporthub.core.constants import HostKind
from reporthub.core.errors import OutputClosedError


class Output(Protocol):
    """Writable sink interface shared by every output kind."""

    def write(self, chunk: str = "") -> Any: ...
    def end(self, chunk: str = "") -> Any: ...


class StreamOutput:
    """Forwards writes to an already open stream that must never be closed (stdout)."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def write(self, chunk: str = "") -> int:
        return self._stream.write(chunk)

    # Reporters may end their output unconditionally; stdout stays open
    end = write


class FileOutput:
    """Write stream to a file, opened on construction."""

    def __init__(self, filename: str | Path) -> None:
        self.path = Path(filename)
        self._file = self.path.open("w", encoding="utf-8")
        logger.debug("Opened reporter output {}", self.path)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write(self, chunk: str = "") -> int:
        if self._file.closed:
            raise OutputClosedError(f"Output {self.path} already ended", code="output_closed")
        return self._file.write(chunk)

    def end(self, chunk: str = "") -> None:
        if chunk:
            self.write(chunk)
        if not self._file.closed:
            self._file.close()
            logger.debug("Closed reporter output {}", self.path)


class PreformattedOutput:
    """Collects text nodes in a ``<pre>`` element; ``end`` attaches it to the page.

    ``document`` is a DOM-like object (``js.document`` under Pyodide) exposing
    ``createElement``, ``createTextNode`` and ``body.appendChild``.
    """

    def __init__(self, document: Any) -> None:
        self._document = document
        self.element = document.createElement("pre")
        self.ended = False

    def write(self, chunk: str = "") -> None:
        if self.ended:
            raise OutputClosedError("Output already attached to the document", code="output_closed")
        self.element.appendChild(self._document.createTextNode(chunk))

    def end(self, chunk: str = "") -> None:
        self.write(chunk)
        self._document.body.appendChild(self.element)
        self.ended = True


def detect_host() -> HostKind:
    """Guess the host kind from the running interpreter."""
    if sys.platform == "emscripten":
        return "document"
    return "filesystem"


def _browser_document() -> Any:
    from js import document  # type: ignore[import-not-found]

    return document


def resolve_output(
    filename: str | Path | None,
    host: HostKind,
    document: Any = None,
) -> Output:
    """Build the sink a reporter config exposes as ``output``."""
    if host == "document":
        return PreformattedOutput(document if document is not None else _browser_document())
    if filename:
        return FileOutput(filename)
    return StreamOutput(sys.stdout)


def output_factory(host: HostKind, document: Any = None) -> Callable[[Any], Output]:
    """Return a resolver bound to ``host``, called with the reporter config on first access."""

    def factory(config: Any) -> Output:
        return resolve_output(config.get("filename"), host, document)

    return factory
