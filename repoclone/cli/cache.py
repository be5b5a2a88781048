"""CLI commands for clone cache management"""

from pathlib import Path
from typing import Optional

import click

from repoclone.cli.utils.logging import logger
from repoclone.config import get_clone_cache_dir
from repoclone.git import clear_cache, describe_cache

cache_dir_option = click.option(
    "--cache-dir",
    type=click.Path(file_okay=False),
    default=None,
    envvar="REPOCLONE_CACHE_DIR",
    help="Root of the clone cache. Defaults to the configured cache directory.",
)


def _resolve_cache_dir(cache_dir: Optional[str]) -> Path:
    if cache_dir is None:
        return get_clone_cache_dir()
    return Path(cache_dir).expanduser()


@click.group(name="cache")
def cache():
    """Manage the clone cache."""
    pass


@cache.command("path")
@cache_dir_option
def path(cache_dir: Optional[str]):
    """Print the root of the clone cache."""
    click.echo(str(_resolve_cache_dir(cache_dir)))


@cache.command("describe")
@cache_dir_option
def describe(cache_dir: Optional[str]):
    """List the repositories held in the clone cache.

    Example:

      repoclone cache describe
    """
    root = _resolve_cache_dir(cache_dir)
    entries = describe_cache(root)

    if not entries:
        logger.info(f"No cached repositories in {root}")
        return

    key_width = max(len(entry["key"]) for entry in entries)
    for entry in entries:
        head = entry["head"][:7] if entry["head"] != "unknown" else entry["head"]
        click.echo(
            f"{entry['key']:<{key_width}}  {head:<7}  {entry['branch']}  {entry['url']}"
        )


@cache.command("clear")
@cache_dir_option
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
def clear(cache_dir: Optional[str], yes: bool):
    """Remove every cached repository."""
    root = _resolve_cache_dir(cache_dir)

    if not yes:
        click.confirm(f"Remove all cached repositories in {root}?", abort=True)

    removed = clear_cache(root)
    logger.info(f"Removed {removed} entries from {root}")
