"""netcache -- disk-backed record/replay cache for HTTP responses in test runs.

Tests that talk to real services record each response once under a cache
directory and replay it on later runs, so suites run offline and
deterministically.  An entry's location is derived from the request's
host, path and method plus optional caller-supplied *scope* segments.

Typical use::

    from netcache import CacheEntryOptions, CachingTransport

    options = CacheEntryOptions(base_dir=".network-cache", ttl=60)
    client = httpx.Client(transport=CachingTransport(httpx.HTTPTransport(), options))

Modules:
    cache: Cache entry engine (key derivation, freshness, stores, replay).
    transport: httpx transports that record and replay through the cache.
    models: Pydantic models for stored metadata and entry options.
    config: Cache root resolution and atomic writes.
    exceptions: Exception hierarchy.
"""

from netcache.cache import CacheEntry, SyntheticResponse
from netcache.exceptions import CorruptMetadataError, MissingBodyError, NetcacheError
from netcache.models import CacheEntryOptions, ResponseInfo
from netcache.transport import AsyncCachingTransport, CachingTransport

__version__ = "0.1.0"

__all__ = [
    "AsyncCachingTransport",
    "CacheEntry",
    "CacheEntryOptions",
    "CachingTransport",
    "CorruptMetadataError",
    "MissingBodyError",
    "NetcacheError",
    "ResponseInfo",
    "SyntheticResponse",
]
