"""Per-reporter configuration object."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from functools import cached_property
from typing import Any

from reporthub.core.errors import ReporterConfigurationError

_MISSING = object()


def _lookup(source: Any, key: str) -> Any:
    if source is None:
        return _MISSING
    if hasattr(source, "__getitem__") and hasattr(source, "__contains__"):
        return source[key] if key in source else _MISSING
    return getattr(source, key, _MISSING)


class ReporterConfig:
    """Configuration handed to a reporter constructor.

    Values not set on the config itself are read through from ``base`` (a
    mapping or another config), so the caller's config is never mutated.
    ``output`` is resolved by ``output_factory`` on first read and cached on
    the instance; building the config acquires nothing.
    """

    def __init__(
        self,
        base: Any = None,
        *,
        output_factory: Callable[[ReporterConfig], Any] | None = None,
        **values: Any,
    ) -> None:
        self._base = base
        self._output_factory = output_factory
        self._values: dict[str, Any] = dict(values)

    @cached_property
    def output(self) -> Any:
        if self._output_factory is None:
            # Falls through to __getattr__ and so to the base config
            raise AttributeError("output")
        try:
            return self._output_factory(self)
        except Exception as exc:
            # An AttributeError here must not fall through to __getattr__
            raise ReporterConfigurationError(
                f"Could not resolve reporter output: {exc}",
                code="output_unavailable",
                original_error=exc,
            ) from exc

    @property
    def output_resolved(self) -> bool:
        """True once ``output`` has been read."""
        return "output" in self.__dict__

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        value = self.get(name, _MISSING)
        if value is _MISSING:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return value

    def get(self, key: str, default: Any = None) -> Any:
        if key == "output" and (self.output_resolved or self._output_factory is not None):
            return self.output
        if key in self._values:
            return self._values[key]
        value = _lookup(self._base, key)
        return default if value is _MISSING else value

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        if key == "output" and (self.output_resolved or self._output_factory is not None):
            return True
        return isinstance(key, str) and self.get(key, _MISSING) is not _MISSING

    def keys(self) -> list[str]:
        keys: list[str] = []
        if self._base is not None and hasattr(self._base, "keys"):
            keys.extend(self._base.keys())
        keys.extend(k for k in self._values if k not in keys)
        if self._output_factory is not None and "output" not in keys:
            keys.append("output")
        return keys

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"ReporterConfig(keys={self.keys()!r})"
