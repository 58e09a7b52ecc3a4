"""Cache root resolution and atomic file writes.

This module holds the pieces of netcache that touch the process
environment, kept apart from the cache-entry core so that
:class:`~netcache.cache.entry.CacheEntry` only ever sees an explicit
``base_dir``:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.netcache/`` on macOS and Windows. See :func:`get_cache_dir`.
* **Run bootstrap** -- :func:`resolve_base_dir` picks the cache root for a
  test run from an explicit value, the ``NETWORK_CACHE_DIR`` environment
  variable, or the XDG default, in that order.
* **Atomic writes** -- :func:`atomic_write` publishes a text file with a
  temp-file-then-rename so readers never see a half-written record.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

_APP_NAME = "netcache"
BASE_DIR_ENV_VAR = "NETWORK_CACHE_DIR"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def get_cache_dir() -> Path:
    """Return the default cache directory, creating it if necessary.

    Recorded responses can be safely deleted at any time; they are
    re-recorded on the next run that misses them.

    On Linux/BSD: ``$XDG_CACHE_HOME/netcache/`` (default ``~/.cache/netcache/``).
    On macOS/Windows: ``~/.netcache/cache/``.

    Returns:
        Absolute path to the cache directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CACHE_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".cache"
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_base_dir(explicit: Optional[str | Path] = None) -> Path:
    """Resolve the cache root for a run.

    Precedence (highest first): *explicit*, ``$NETWORK_CACHE_DIR``,
    :func:`get_cache_dir`.  Only the XDG default is created eagerly; the
    other roots are created lazily by the first saved entry.

    Args:
        explicit: A caller-chosen root, e.g. a per-run directory.

    Returns:
        The cache root as a :class:`~pathlib.Path`.
    """
    if explicit:
        return Path(explicit)
    env_value = os.environ.get(BASE_DIR_ENV_VAR, "")
    if env_value:
        return Path(env_value)
    return get_cache_dir()


# --- Atomic writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The parent directory is created first (recursively, idempotently).  The
    temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  On success the
    temp file is renamed over *path*; on any failure the temp file is
    cleaned up and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
