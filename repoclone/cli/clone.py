"""cli command to obtain a local checkout of a repository"""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from repoclone.cli.utils.logging import logger
from repoclone.exceptions import CloneError
from repoclone.filesys import CacheDirectory
from repoclone.git import Cloner, GitExecCloner
from repoclone.model import RepoSpec


def get_cloner(ctx: click.Context, cache_dir: Optional[str]) -> Cloner:
    """Return the cloner injected in the context object, or a GitExecCloner."""
    obj = ctx.find_root().obj or {}
    if obj.get("cloner") is not None:
        return obj["cloner"]

    if cache_dir is not None:
        return GitExecCloner(cache=CacheDirectory(Path(cache_dir)))
    return GitExecCloner()


@click.command("clone")
@click.argument("org_repo")
@click.option(
    "--ref",
    "-r",
    default="",
    help="Branch, tag or commit to check out. Defaults to master.",
)
@click.option(
    "--host",
    default="https://github.com/",
    show_default=True,
    help="Prefix of the clone URL.",
)
@click.option(
    "--suffix",
    "git_suffix",
    default=".git",
    show_default=True,
    help="Suffix of the clone URL.",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False),
    default=None,
    envvar="REPOCLONE_CACHE_DIR",
    help="Root of the clone cache. Defaults to the configured cache directory.",
)
@click.pass_context
def clone(
    ctx,
    org_repo: str,
    ref: str,
    host: str,
    git_suffix: str,
    cache_dir: Optional[str],
):
    """Obtain a local checkout of ORG_REPO and print its directory.

    Example:

      repoclone clone example/repo --ref v1.0.0
    """
    try:
        repo_spec = RepoSpec(org_repo=org_repo, ref=ref, host=host, git_suffix=git_suffix)
    except ValidationError as e:
        logger.error(f"Invalid repository: {e}")
        sys.exit(1)

    cloner = get_cloner(ctx, cache_dir)

    try:
        resolved = cloner(repo_spec)
    except CloneError as e:
        logger.error(f"Failed to clone {repo_spec.clone_spec()}: {e}")
        sys.exit(1)

    click.echo(str(resolved.dir))
