"""Responses rebuilt from a cache entry instead of the network.

:class:`SyntheticResponse` carries the stored metadata and body and
exposes the same read surface as a live :class:`httpx.Response`
(``status_code``, ``reason_phrase``, ``headers``, ``content``, ``text``,
``json()``, ...).  Code that needs a genuine ``httpx.Response`` -- for
example a transport handing the result back to an ``httpx.Client`` -- can
call :meth:`SyntheticResponse.to_httpx`.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx

from netcache.models import ResponseInfo

# The stored body is already decoded; httpx recomputes Content-Length from it.
_DROPPED_ON_REPLAY = frozenset({"content-encoding", "content-length", "transfer-encoding"})


class SyntheticResponse:
    """An immutable response value reconstructed from a cache entry.

    Args:
        info: The stored response metadata.
        body: The stored body bytes.

    Example::

        response = SyntheticResponse(info, b'{"id": 1}')
        if response.ok:
            data = response.json()
    """

    __slots__ = ("_info", "_body")

    def __init__(self, info: ResponseInfo, body: bytes) -> None:
        object.__setattr__(self, "_info", info.model_copy(deep=True))
        object.__setattr__(self, "_body", bytes(body))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<SyntheticResponse [{self.status} {self.status_text}] {self.url}>"

    # ------------------------------------------------------------------ #
    # Read surface
    # ------------------------------------------------------------------ #

    @property
    def url(self) -> str:
        return self._info.url

    @property
    def status(self) -> int:
        return self._info.status

    @property
    def status_text(self) -> str:
        return self._info.status_text

    @property
    def headers(self) -> Mapping[str, str]:
        """Header mapping with names in the case they were recorded."""
        return MappingProxyType(self._info.headers)

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status <= 299

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def info(self) -> ResponseInfo:
        return self._info.model_copy(deep=True)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive single header lookup."""
        lowered = name.lower()
        for key, value in self._info.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @property
    def encoding(self) -> str:
        """Charset declared in ``Content-Type``, else ``utf-8``."""
        for param in self._info.content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"

    @property
    def text(self) -> str:
        try:
            return self._body.decode(self.encoding, errors="replace")
        except LookupError:
            return self._body.decode("utf-8", errors="replace")

    def json(self, **kwargs: Any) -> Any:
        return json.loads(self.text, **kwargs)

    # ------------------------------------------------------------------ #
    # httpx.Response-compatible aliases
    # ------------------------------------------------------------------ #

    @property
    def status_code(self) -> int:
        return self.status

    @property
    def reason_phrase(self) -> str:
        return self.status_text

    @property
    def is_success(self) -> bool:
        return self.ok

    @property
    def content(self) -> bytes:
        return self._body

    def read(self) -> bytes:
        return self._body

    async def aread(self) -> bytes:
        return self._body

    def to_httpx(self, request: Optional[httpx.Request] = None) -> httpx.Response:
        """Build a real :class:`httpx.Response` carrying the stored data.

        Args:
            request: The request being answered.  Defaults to a ``GET`` of
                the recorded URL.
        """
        headers = [
            (name.encode("utf-8"), value.encode("utf-8"))
            for name, value in self._info.headers.items()
            if name.lower() not in _DROPPED_ON_REPLAY
        ]
        return httpx.Response(
            status_code=self.status,
            headers=headers,
            content=self._body,
            request=request or httpx.Request("GET", self.url),
            extensions={"reason_phrase": self.status_text.encode("ascii", errors="ignore")},
        )
