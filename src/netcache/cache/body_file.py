"""Body half of a cache entry.

The payload is stored as raw bytes.  The response's content type only
picks the file extension (``.body.json``, ``.body.html``, ...) so a person
browsing the cache tree can open the file with the right tool; the bytes
are never transcoded.
"""

from __future__ import annotations

from pathlib import Path

from netcache.exceptions import MissingBodyError
from netcache.models import ResponseInfo

BODY_FILENAME = ".body"

_EXTENSIONS = (
    ("json", ".json"),
    ("html", ".html"),
    ("xml", ".xml"),
    ("javascript", ".js"),
    ("css", ".css"),
    ("text/", ".txt"),
)


def body_extension(content_type: str) -> str:
    """Return the body file extension for a ``Content-Type`` value."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not media_type:
        return ".bin"
    for marker, ext in _EXTENSIONS:
        if marker in media_type:
            return ext
    return ".bin"


class BodyFile:
    """Raw body file bound to an entry directory and its response metadata."""

    def __init__(self, directory: Path, info: ResponseInfo) -> None:
        self._path = Path(directory) / (BODY_FILENAME + body_extension(info.content_type))

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> bytes:
        """Return the stored bytes.

        Raises:
            MissingBodyError: The metadata was written but the body was not
                (an interrupted or in-flight save).
        """
        try:
            return self._path.read_bytes()
        except FileNotFoundError as exc:
            raise MissingBodyError(
                f"Cache entry has metadata but no body: {self._path}", path=self._path
            ) from exc

    def save(self, body: bytes) -> None:
        """Write *body*, replacing a body left by an earlier save of another content type."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(body)
        for stale in self._path.parent.glob(BODY_FILENAME + ".*"):
            if stale != self._path:
                stale.unlink(missing_ok=True)
