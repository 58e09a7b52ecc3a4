"""Filesystem-safe path segments for cache keys.

Hostnames, URL paths, methods and scope tokens all become directory names
under the cache root.  :func:`sanitize` turns each of them into a single
safe path component.  It never raises: anything it cannot represent is
replaced with :data:`REPLACEMENT`.

The sanitizer never returns a segment starting with ``.``, which keeps the
entry's own files (``.headers.json``, ``.body*``) out of the key space and
rules out ``.`` and ``..`` traversal.
"""

from __future__ import annotations

import re
from typing import Any

REPLACEMENT = "!"
MAX_SEGMENT_BYTES = 200

_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
_LEADING_DOTS = re.compile(r"^\.+")
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)


def strip_leading_slash(value: str) -> str:
    """Remove a single leading ``/`` (URL paths arrive as ``/users/1``)."""
    return value[1:] if value.startswith("/") else value


def sanitize(segment: Any) -> str:
    """Return *segment* as a filesystem-safe path component.

    Steps, in order: strip one leading ``/``, replace path separators,
    reserved and control characters, replace each leading dot, suffix
    Windows device names, truncate to :data:`MAX_SEGMENT_BYTES` of UTF-8
    without splitting a character.  Unencodable characters (lone
    surrogates) become :data:`REPLACEMENT`.  Empty input yields ``""``;
    callers drop empty segments.

    Example::

        >>> sanitize("/users/42")
        'users!42'
        >>> sanitize("..")
        '!!'
    """
    value = str(segment).encode("utf-8", errors="replace").decode("utf-8")
    value = strip_leading_slash(value)
    value = _ILLEGAL_CHARS.sub(REPLACEMENT, value)
    value = _LEADING_DOTS.sub(lambda m: REPLACEMENT * len(m.group()), value)
    if _WINDOWS_RESERVED.match(value):
        value += REPLACEMENT
    return value.encode("utf-8")[:MAX_SEGMENT_BYTES].decode("utf-8", errors="ignore")
