"""
Inspection of the clone cache.

Cache Structure Example:
    ~/.cache/repoclone/repos/
    ├── example%2Frepomaster/       # example/repo @ master
    │   ├── .git/
    │   └── ...
    ├── example%2Frepov1.2.0/       # example/repo @ v1.2.0
    ├── example%2Freporelease%2F1.0/  # example/repo @ release/1.0
    └── org%2Ftoolmain/             # org/tool @ main

Every slot sits directly under the root, named by its percent-encoded cache
key. Each slot is a shallow clone of a single ref. A slot counts as populated as
soon as it contains a ``.git`` directory; the checkout itself is not verified.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from dulwich import porcelain

from repoclone.config import get_clone_cache_dir
from repoclone.filesys import slot_key

logger = logging.getLogger(__name__)


def is_cached(directory: Path) -> bool:
    """
    Check whether a cache slot already holds a clone.

    Args:
        directory: Cache slot directory

    Returns:
        True if the directory contains git metadata
    """
    return (directory / ".git").exists()


def _head_commit(repo) -> str:
    head_bytes = repo.head()
    if len(head_bytes) == 20:
        return head_bytes.hex()
    return head_bytes.decode("ascii")


def _branch_name(repo) -> str:
    symrefs = repo.refs.get_symrefs()
    target = symrefs.get(b"HEAD")
    if target and target.startswith(b"refs/heads/"):
        return target[len(b"refs/heads/") :].decode("utf-8")
    return "detached"


def describe_cache(cache_dir: Optional[Path] = None) -> list:
    """
    Describe the repositories held in the clone cache.

    Args:
        cache_dir: Cache root (defaults to the configured clone cache)

    Returns:
        List of dictionaries, sorted by key:
        - key: Cache key, decoded from the slot name
        - path: Absolute path of the slot
        - url: Origin remote URL (or "unknown")
        - head: HEAD commit hash (or "unknown")
        - branch: Checked out branch (or "detached")
    """
    if cache_dir is None:
        cache_dir = get_clone_cache_dir()

    if not cache_dir.exists():
        return []

    results = []

    for repo_path in cache_dir.iterdir():
        # Slots never nest, so only direct children can be clones
        if not repo_path.is_dir() or not (repo_path / ".git").is_dir():
            continue

        try:
            repo = porcelain.open_repo(str(repo_path))
        except Exception as e:
            logger.debug(f"Failed to read repo at {repo_path}: {e}")
            continue

        try:
            config = repo.get_config()
            try:
                remote_url = config.get((b"remote", b"origin"), b"url").decode("utf-8")
            except KeyError:
                remote_url = "unknown"

            try:
                head_commit = _head_commit(repo)
            except KeyError:
                # Empty repository, or a clone interrupted before checkout
                head_commit = "unknown"

            results.append(
                {
                    "key": slot_key(repo_path.name),
                    "path": repo_path,
                    "url": remote_url,
                    "head": head_commit,
                    "branch": _branch_name(repo),
                }
            )
        finally:
            repo.close()

    return sorted(results, key=lambda info: info["key"])


def clear_cache(cache_dir: Optional[Path] = None) -> int:
    """
    Remove every entry below the cache root.

    The root itself is kept.

    Args:
        cache_dir: Cache root (defaults to the configured clone cache)

    Returns:
        Number of top-level entries removed
    """
    if cache_dir is None:
        cache_dir = get_clone_cache_dir()

    if not cache_dir.exists():
        return 0

    removed = 0
    for entry in cache_dir.iterdir():
        logger.info(f"Removing {entry}")
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1

    return removed
