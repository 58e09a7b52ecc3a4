"""Shared test fixtures for netcache.

Provides a cache root under ``tmp_path``, default entry options and a
helper for ageing an entry without sleeping.  These fixtures are
automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable

import pytest

from netcache.models import CacheEntryOptions


# ---------------------------------------------------------------------------
# Cache root
# ---------------------------------------------------------------------------


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Cache root for a single test."""
    return tmp_path / "network-cache"


@pytest.fixture
def options(base_dir: Path) -> CacheEntryOptions:
    """Default options: no scope, no expected status, no TTL."""
    return CacheEntryOptions(base_dir=base_dir)


# ---------------------------------------------------------------------------
# Time travel
# ---------------------------------------------------------------------------


@pytest.fixture
def age_file() -> Callable[[Path, float], None]:
    """Move a file's mtime *seconds* into the past."""

    def _age(path: Path, seconds: float) -> None:
        past = time.time() - seconds
        os.utime(path, (past, past))

    return _age
