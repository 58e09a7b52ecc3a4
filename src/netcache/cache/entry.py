"""Cache entry for a single request.

A :class:`CacheEntry` maps a request plus :class:`~netcache.models.CacheEntryOptions`
to a directory under ``base_dir``::

    <base_dir>/<hostname>/<pathname>/<method>[/<status>][/<scope>...]/
        .headers.json
        .body.<ext>

The query string is not part of the key; use ``scope`` to fork entries
that differ only by query, body or test name.

Typical flow::

    entry = CacheEntry(request, options)
    if entry.exists():
        return entry.get_response()
    response = send(request)
    if entry.should_cache(response):
        entry.save_response(response)
    return response

Every call re-reads the filesystem; nothing is cached in memory.  Saves
write the metadata before the body, so a reader racing a writer can see
:class:`~netcache.exceptions.MissingBodyError`.  Concurrent writers to the
same key are not coordinated: the last write of each file wins.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Union

import httpx

from netcache.cache.body_file import BodyFile
from netcache.cache.headers_file import HeadersFile
from netcache.cache.paths import sanitize
from netcache.cache.scope import scope_from_option
from netcache.cache.synthetic import SyntheticResponse
from netcache.models import CacheEntryOptions, ResponseInfo

logger = logging.getLogger(__name__)

LiveResponse = Union[httpx.Response, SyntheticResponse]


def _header_dict(response: LiveResponse) -> dict[str, str]:
    """Return headers with names in wire case; repeated fields are comma-joined."""
    if isinstance(response, SyntheticResponse):
        return dict(response.headers)
    encoding = response.headers.encoding
    folded: dict[str, str] = {}
    names: dict[str, str] = {}
    for raw_name, raw_value in response.headers.raw:
        name = raw_name.decode(encoding)
        value = raw_value.decode(encoding)
        key = names.setdefault(name.lower(), name)
        folded[key] = f"{folded[key]}, {value}" if key in folded else value
    return folded


def response_info(response: LiveResponse) -> ResponseInfo:
    """Extract the stored metadata fields from a live or synthetic response."""
    return ResponseInfo(
        url=str(response.url),
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=_header_dict(response),
    )


class CacheEntry:
    """Read/write access to the cache entry for one request.

    The entry directory is derived once, at construction; changing the
    request or options afterwards has no effect.

    Args:
        request: The outgoing request.  Anything with ``method`` and
            ``url`` attributes works; normally an :class:`httpx.Request`.
        options: Cache root, scope, expected status and TTL.

    Example::

        options = CacheEntryOptions(base_dir="/tmp/cache", ttl=5)
        entry = CacheEntry(httpx.Request("GET", "https://api.example.com/users"), options)
        entry.cache_dir  # /tmp/cache/api.example.com/users/GET
    """

    def __init__(self, request: Any, options: CacheEntryOptions) -> None:
        self._request = request
        self._options = options
        self._cache_dir = self._build_cache_dir()
        self._headers_file = HeadersFile(self._cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    # ------------------------------------------------------------------ #
    # Freshness
    # ------------------------------------------------------------------ #

    def exists(self) -> bool:
        """True if the entry has been saved and is within its TTL.

        Age is measured from the metadata file's modification time, so
        every :meth:`save_response` restarts the clock.
        """
        probe = self._headers_file.probe()
        if not probe.exists:
            return False
        ttl = self._options.ttl
        if ttl is None:
            return True
        age = time.time() - (probe.modified_at or 0)
        return age < ttl * 60

    def should_cache(self, response: LiveResponse) -> bool:
        """True if *response* has the expected status and no fresh entry exists.

        A stale entry does not block caching, which is how expired entries
        get refreshed.
        """
        return self._match_status(response) and not self.exists()

    # ------------------------------------------------------------------ #
    # Read / write
    # ------------------------------------------------------------------ #

    def get_response(self) -> SyntheticResponse:
        """Rebuild the stored response.

        Freshness is not re-checked: callers decide via :meth:`exists`, and
        may deliberately read a stale entry.

        Raises:
            CorruptMetadataError: The metadata file is malformed.
            MissingBodyError: The body file is absent.
            FileNotFoundError: Nothing was ever saved here.
        """
        info = self._headers_file.read()
        body = BodyFile(self._cache_dir, info).read()
        logger.debug("Cache hit: %s %s", info.status, self._cache_dir)
        return SyntheticResponse(info, body)

    def save_response(self, response: LiveResponse) -> None:
        """Persist *response*, metadata first, then body.

        The body is read from the response (``response.read()``), so a
        streamed response is consumed by this call.
        """
        info = response_info(response)
        body = response.read()
        self._headers_file.save(info)
        BodyFile(self._cache_dir, info).save(body)
        logger.debug("Cache save: %s %s (%d bytes)", info.status, self._cache_dir, len(body))

    # ------------------------------------------------------------------ #
    # Async variants
    # ------------------------------------------------------------------ #

    async def aexists(self) -> bool:
        return await asyncio.to_thread(self.exists)

    async def ashould_cache(self, response: LiveResponse) -> bool:
        return self._match_status(response) and not await self.aexists()

    async def aget_response(self) -> SyntheticResponse:
        info = await asyncio.to_thread(self._headers_file.read)
        body = await asyncio.to_thread(BodyFile(self._cache_dir, info).read)
        logger.debug("Cache hit: %s %s", info.status, self._cache_dir)
        return SyntheticResponse(info, body)

    async def asave_response(self, response: LiveResponse) -> None:
        info = response_info(response)
        body = await response.aread()
        await asyncio.to_thread(self._headers_file.save, info)
        await asyncio.to_thread(BodyFile(self._cache_dir, info).save, body)
        logger.debug("Cache save: %s %s (%d bytes)", info.status, self._cache_dir, len(body))

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_cache_dir(self) -> Path:
        url = httpx.URL(str(self._request.url))
        pathname = url.raw_path.split(b"?", 1)[0].decode("ascii")
        status = self._options.status
        scope = scope_from_option(self._options.scope).resolve(self._request)
        parts = [
            url.raw_host.decode("ascii"),
            pathname,
            str(self._request.method),
            str(status) if status else "",
            *scope,
        ]
        dirs = [d for d in (sanitize(p) for p in parts) if d]
        return Path(self._options.base_dir).joinpath(*dirs)

    def _match_status(self, response: LiveResponse) -> bool:
        status = self._options.status
        if status:
            return response.status_code == status
        return response.is_success
