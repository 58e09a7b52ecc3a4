"""Scope: caller-supplied key material that forks otherwise-identical entries.

A scope is configured either as a literal (one segment or a list of them)
or as a function of the request.  :func:`scope_from_option` turns the
configured value into one of two variants, and the variant is resolved
exactly once, when a :class:`~netcache.cache.entry.CacheEntry` is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union


def _to_segments(value: Any) -> tuple[str, ...]:
    """Normalise a scope value to a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        value = [value]
    segments = []
    for item in value:
        if isinstance(item, bytes):
            item = item.decode("utf-8", errors="replace")
        text = str(item) if item is not None else ""
        if text:
            segments.append(text)
    return tuple(segments)


@dataclass(frozen=True)
class LiteralScope:
    """Fixed scope segments, identical for every request."""

    segments: tuple[str, ...] = ()

    def resolve(self, request: Any) -> tuple[str, ...]:
        return self.segments


@dataclass(frozen=True)
class ComputedScope:
    """Scope derived from the request by a caller-supplied function."""

    fn: Callable[[Any], Any]

    def resolve(self, request: Any) -> tuple[str, ...]:
        return _to_segments(self.fn(request))


Scope = Union[LiteralScope, ComputedScope]


def scope_from_option(option: Any) -> Scope:
    """Build the scope variant for a ``CacheEntryOptions.scope`` value."""
    if callable(option):
        return ComputedScope(option)
    return LiteralScope(_to_segments(option))
