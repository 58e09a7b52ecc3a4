"""Metadata half of a cache entry.

:class:`HeadersFile` reads and writes the :class:`~netcache.models.ResponseInfo`
record (url, status, status text, headers) at a fixed file name inside an
entry directory.  The file's presence and modification time are what the
entry's freshness check looks at, so saving the record also restarts the
entry's TTL clock.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from netcache.config import atomic_write
from netcache.exceptions import CorruptMetadataError
from netcache.models import ResponseInfo

HEADERS_FILENAME = ".headers.json"


@dataclass(frozen=True)
class FileProbe:
    """Result of :meth:`HeadersFile.probe`."""

    exists: bool
    modified_at: Optional[float] = None


class HeadersFile:
    """JSON metadata file bound to one entry directory.

    Args:
        directory: The entry directory.  It does not have to exist yet;
            :meth:`save` creates it.
    """

    def __init__(self, directory: Path) -> None:
        self._path = Path(directory) / HEADERS_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def probe(self) -> FileProbe:
        """Stat the metadata file.  A missing file is reported, not raised."""
        try:
            st = self._path.stat()
        except FileNotFoundError:
            return FileProbe(exists=False)
        return FileProbe(exists=True, modified_at=st.st_mtime)

    def read(self) -> ResponseInfo:
        """Parse the stored record.

        Raises:
            CorruptMetadataError: The file is not UTF-8 JSON, or does not
                hold exactly the four response fields with the right types.
            FileNotFoundError: The entry was never saved.
        """
        raw = self._path.read_bytes()
        try:
            return ResponseInfo.model_validate_json(raw, by_alias=True, by_name=False)
        except ValidationError as exc:
            raise CorruptMetadataError(
                f"Malformed cache metadata at {self._path}: {exc}", path=self._path
            ) from exc

    def save(self, info: ResponseInfo) -> None:
        """Write the record, creating the entry directory if needed."""
        data = info.model_dump(by_alias=True)
        atomic_write(self._path, json.dumps(data, indent=2, ensure_ascii=False))
