"""httpx transports that replay recorded responses.

:class:`CachingTransport` and :class:`AsyncCachingTransport` wrap another
transport.  For each request they build a
:class:`~netcache.cache.entry.CacheEntry`: a fresh entry is replayed
without touching the wrapped transport; otherwise the request is sent
through, and a qualifying response is recorded on the way back.

Example::

    options = CacheEntryOptions(base_dir=resolve_base_dir(), ttl=60)
    transport = CachingTransport(httpx.HTTPTransport(), options)
    with httpx.Client(transport=transport) as client:
        client.get("https://api.example.com/users")  # recorded
        client.get("https://api.example.com/users")  # replayed
"""

from __future__ import annotations

import logging

import httpx

from netcache.cache.entry import CacheEntry
from netcache.models import CacheEntryOptions

logger = logging.getLogger(__name__)


class CachingTransport(httpx.BaseTransport):
    """Synchronous record/replay wrapper around an httpx transport.

    Args:
        transport: The transport that performs real requests.
        options: Cache options applied to every request.
    """

    def __init__(self, transport: httpx.BaseTransport, options: CacheEntryOptions) -> None:
        self._transport = transport
        self._options = options

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        entry = CacheEntry(request, self._options)
        if entry.exists():
            return entry.get_response().to_httpx(request)

        logger.debug("Cache miss: %s %s", request.method, request.url)
        response = self._transport.handle_request(request)
        response.request = request
        response.read()
        if entry.should_cache(response):
            entry.save_response(response)
        return response

    def close(self) -> None:
        self._transport.close()


class AsyncCachingTransport(httpx.AsyncBaseTransport):
    """Asynchronous counterpart of :class:`CachingTransport`."""

    def __init__(self, transport: httpx.AsyncBaseTransport, options: CacheEntryOptions) -> None:
        self._transport = transport
        self._options = options

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        entry = CacheEntry(request, self._options)
        if await entry.aexists():
            response = await entry.aget_response()
            return response.to_httpx(request)

        logger.debug("Cache miss: %s %s", request.method, request.url)
        response = await self._transport.handle_async_request(request)
        response.request = request
        await response.aread()
        if await entry.ashould_cache(response):
            await entry.asave_response(response)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()
