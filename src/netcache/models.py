"""Pydantic models shared across netcache modules.

Two models describe everything the cache persists or is configured with:

**Stored record** -- :class:`ResponseInfo`, the metadata half of a cache
entry, serialised as JSON next to the body file.

**Configuration** -- :class:`CacheEntryOptions`, passed to every
:class:`~netcache.cache.entry.CacheEntry` to select the cache root, the
extra key material (``scope``), the expected status and the freshness
window.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


ScopeFn = Callable[[Any], Any]
"""A scope computed from the request; returns a string, a list of strings or ``None``."""


class ResponseInfo(BaseModel):
    """Metadata describing one recorded HTTP response.

    Written to the entry's metadata file by
    :class:`~netcache.cache.headers_file.HeadersFile` and read back to
    rebuild a :class:`~netcache.cache.synthetic.SyntheticResponse`.  Header
    names keep the case they were received with; values are stored as-is.
    Validation is strict: a record on disk must use ``statusText`` and a
    JSON integer ``status``.

    Example::

        ResponseInfo(
            url="https://api.example.com/users",
            status=200,
            status_text="OK",
            headers={"Content-Type": "application/json"},
        )
    """

    model_config = ConfigDict(
        extra="forbid", strict=True, validate_by_name=True, validate_by_alias=True
    )

    url: str
    status: int
    status_text: str = Field(alias="statusText")
    headers: dict[str, str]

    @property
    def content_type(self) -> str:
        """Return the ``Content-Type`` header value (case-insensitive lookup), or ``""``."""
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return ""


class CacheEntryOptions(BaseModel):
    """Configuration for a :class:`~netcache.cache.entry.CacheEntry`.

    Attributes:
        base_dir: Root of the cache tree.  Every entry lives below it.
        scope: Extra directory segments that fork otherwise-identical
            requests.  A string, a list of strings, or a callable receiving
            the request and returning either (or ``None``).
        status: Expected HTTP status of responses worth caching.  When
            unset, any 2xx response qualifies.
        ttl: Freshness window in minutes.  When unset, an entry is fresh
            for as long as it exists.

    Example::

        CacheEntryOptions(
            base_dir="/tmp/network-cache",
            scope=lambda req: req.headers.get("x-test-name"),
            ttl=5,
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_dir: Path
    scope: Union[str, list[str], ScopeFn, None] = None
    status: Optional[int] = Field(default=None, ge=100, le=599)
    ttl: Optional[float] = Field(default=None, ge=0)
