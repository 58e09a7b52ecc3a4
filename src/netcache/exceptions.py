"""Exception hierarchy for netcache.

All exceptions inherit from :class:`NetcacheError`.  Cache entries never
repair themselves: a damaged entry is reported to the caller, who decides
whether to re-record it or fail the run.

Subclass hierarchy::

    NetcacheError
    +-- CorruptMetadataError   (metadata file unreadable as a response record)
    +-- MissingBodyError       (metadata present, body file absent)

Filesystem errors (:class:`OSError` and its subclasses) are not wrapped;
they propagate unchanged from the store that hit them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class NetcacheError(Exception):
    """Base exception for all netcache errors.

    Args:
        message: Human-readable error description.
        path: The cache file the error relates to, when there is one.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class CorruptMetadataError(NetcacheError):
    """Raised when a metadata file exists but is not a well-formed response record."""


class MissingBodyError(NetcacheError):
    """Raised when an entry's metadata is present but its body file is not."""
