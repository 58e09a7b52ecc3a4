"""Disk-backed cache entries for recorded HTTP responses.

This package provides :class:`CacheEntry`, which derives an entry
directory from a request, decides whether the entry is fresh, and reads or
writes it through two stores:

* :class:`~netcache.cache.headers_file.HeadersFile` -- the JSON metadata
  record (url, status, status text, headers).
* :class:`~netcache.cache.body_file.BodyFile` -- the raw body bytes.

Reads produce a :class:`SyntheticResponse` that can stand in for a live
:class:`httpx.Response`.
"""

from netcache.cache.entry import CacheEntry
from netcache.cache.synthetic import SyntheticResponse

__all__ = ["CacheEntry", "SyntheticResponse"]
