"""Tests for the record/replay httpx transports."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from netcache.cache.headers_file import HEADERS_FILENAME
from netcache.models import CacheEntryOptions
from netcache.transport import AsyncCachingTransport, CachingTransport


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _CountingHandler:
    """MockTransport handler that counts the requests reaching the 'network'."""

    def __init__(self, status_code: int = 200, content: bytes = b'{"id": 1}') -> None:
        self.status_code = status_code
        self.content = content
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(
            status_code=self.status_code,
            headers={"Content-Type": "application/json", "X-Call": str(self.calls)},
            content=self.content,
        )


def _client(handler: _CountingHandler, options: CacheEntryOptions) -> httpx.Client:
    return httpx.Client(transport=CachingTransport(httpx.MockTransport(handler), options))


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------


class TestCachingTransport:
    def test_records_then_replays(self, options: CacheEntryOptions) -> None:
        handler = _CountingHandler()
        with _client(handler, options) as client:
            first = client.get("https://api.example.com/users")
            second = client.get("https://api.example.com/users?page=2")

        assert handler.calls == 1
        assert first.json() == second.json() == {"id": 1}
        assert second.headers["x-call"] == "1"
        assert second.status_code == 200

    def test_error_response_not_recorded(self, options: CacheEntryOptions) -> None:
        handler = _CountingHandler(status_code=500)
        with _client(handler, options) as client:
            client.get("https://api.example.com/users")
            response = client.get("https://api.example.com/users")

        assert handler.calls == 2
        assert response.status_code == 500
        assert not (options.base_dir / "api.example.com").exists()

    def test_expected_status_recorded(self, base_dir: Path) -> None:
        handler = _CountingHandler(status_code=404, content=b'{"error": "gone"}')
        options = CacheEntryOptions(base_dir=base_dir, status=404)
        with _client(handler, options) as client:
            client.get("https://api.example.com/users/9")
            replayed = client.get("https://api.example.com/users/9")

        assert handler.calls == 1
        assert replayed.status_code == 404
        assert replayed.reason_phrase == "Not Found"

    def test_stale_entry_refreshed(self, base_dir: Path, age_file) -> None:
        handler = _CountingHandler()
        options = CacheEntryOptions(base_dir=base_dir, ttl=1)
        with _client(handler, options) as client:
            client.get("https://api.example.com/users")
            age_file(base_dir / "api.example.com" / "users" / "GET" / HEADERS_FILENAME, 120)
            refreshed = client.get("https://api.example.com/users")
            replayed = client.get("https://api.example.com/users")

        assert handler.calls == 2
        assert refreshed.headers["x-call"] == "2"
        assert replayed.headers["x-call"] == "2"

    def test_scope_forks_entries(self, base_dir: Path) -> None:
        handler = _CountingHandler()
        options = CacheEntryOptions(base_dir=base_dir, scope=lambda req: req.url.params.get("page"))
        with _client(handler, options) as client:
            client.get("https://api.example.com/users?page=1")
            client.get("https://api.example.com/users?page=2")
            client.get("https://api.example.com/users?page=1")

        assert handler.calls == 2

    def test_methods_cached_separately(self, options: CacheEntryOptions) -> None:
        handler = _CountingHandler()
        with _client(handler, options) as client:
            client.get("https://api.example.com/users")
            client.post("https://api.example.com/users", json={"name": "a"})

        assert handler.calls == 2


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------


class TestAsyncCachingTransport:
    def test_records_then_replays(self, options: CacheEntryOptions) -> None:
        handler = _CountingHandler()

        async def scenario() -> tuple[httpx.Response, httpx.Response]:
            transport = AsyncCachingTransport(httpx.MockTransport(handler), options)
            async with httpx.AsyncClient(transport=transport) as client:
                first = await client.get("https://api.example.com/users")
                second = await client.get("https://api.example.com/users")
            return first, second

        first, second = asyncio.run(scenario())
        assert handler.calls == 1
        assert first.json() == second.json() == {"id": 1}

    def test_error_response_not_recorded(self, options: CacheEntryOptions) -> None:
        handler = _CountingHandler(status_code=503)

        async def scenario() -> None:
            transport = AsyncCachingTransport(httpx.MockTransport(handler), options)
            async with httpx.AsyncClient(transport=transport) as client:
                await client.get("https://api.example.com/users")
                await client.get("https://api.example.com/users")

        asyncio.run(scenario())
        assert handler.calls == 2


@pytest.mark.parametrize("transport_cls", [CachingTransport, AsyncCachingTransport])
def test_transport_types(transport_cls: type, options: CacheEntryOptions) -> None:
    transport = transport_cls(httpx.MockTransport(_CountingHandler()), options)
    base = httpx.BaseTransport if transport_cls is CachingTransport else httpx.AsyncBaseTransport
    assert isinstance(transport, base)
