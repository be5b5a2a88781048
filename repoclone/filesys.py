"""Confirmed directories for the clone cache."""

import logging
from pathlib import Path
from typing import Union
from urllib.parse import quote, unquote

from repoclone.exceptions import CacheDirectoryError

logger = logging.getLogger(__name__)


def slot_name(key: str) -> str:
    """
    Directory name of the cache slot for ``key``.

    Every key maps to a single path component, so two slots never nest. ``/``
    and ``%`` are percent-encoded: ``example/repomaster`` becomes
    ``example%2Frepomaster``.
    """
    return quote(key, safe="")


def slot_key(name: str) -> str:
    """Cache key of the slot directory ``name``; inverse of ``slot_name``."""
    return unquote(name)


class CacheDirectory:
    """
    Resolve cache keys to directories directly under a common root.

    Every path handed out exists at the time it is returned. Each key gets its
    own top-level slot, even when it contains slashes, so ``example/repo`` at
    ``release`` and at ``release/1.0`` never share or nest directories.

    Usage:
        cache = CacheDirectory(Path("~/.cache/repoclone/repos"))
        target = cache("example/repomaster")  # <root>/example%2Frepomaster
    """

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, key: str) -> Path:
        """
        Return the confirmed directory for ``key``, creating it on first use.

        Args:
            key: Cache key

        Returns:
            Path to an existing directory

        Raises:
            CacheDirectoryError: If the key is invalid or the directory cannot be created
        """
        if not key:
            raise CacheDirectoryError(key, "empty cache key")

        name = slot_name(key)
        if name in (".", ".."):
            raise CacheDirectoryError(key, "cache key escapes the cache root")

        directory = self._root / name
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(key, str(e)) from e

        if not directory.is_dir():
            raise CacheDirectoryError(key, f"{directory} is not a directory")

        logger.debug(f"Resolved cache key '{key}' to {directory}")
        return directory

    def __call__(self, key: str) -> Path:
        return self.resolve(key)

    def __repr__(self) -> str:
        return f"CacheDirectory({str(self._root)!r})"
