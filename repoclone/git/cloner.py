"""
Strategies for obtaining a local checkout of a repository.

A cloner takes a ``RepoSpec`` and returns a resolved copy of it whose ``dir``
points at an existing directory holding the requested ref. Callers pick a
cloner once and never branch on which one they got:

    # production
    cloner = GitExecCloner()

    # tests
    cloner = DoNothingCloner(fixture_dir)

    spec = cloner(RepoSpec(org_repo="example/repo", ref="v1.0.0"))
    read_things_from(spec.dir)

GitExecCloner shells out to a local git install. Each ref is shallow-cloned
(depth 1) into its own cache slot, keyed by ``org_repo + ref``, and submodules
are initialized recursively. A slot that already contains ``.git`` is reused
without touching the network.

Concurrency:
    No locking is performed. At most one clone per cache key may run at a
    time; concurrent clones of the same (org_repo, ref) race on the cache
    slot.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from repoclone.config import get_clone_cache_dir, get_git_program
from repoclone.exceptions import (
    CloneFailedError,
    GitNotFoundError,
    SubmoduleUpdateError,
)
from repoclone.filesys import CacheDirectory
from repoclone.git.cache import is_cached
from repoclone.git.runner import CommandRunner, SubprocessRunner
from repoclone.model.repo import RepoSpec

logger = logging.getLogger(__name__)


class Cloner(ABC):
    """Obtain a local directory holding a repository at a ref."""

    @abstractmethod
    def clone(self, repo_spec: RepoSpec) -> RepoSpec:
        """
        Make ``repo_spec`` available locally.

        Args:
            repo_spec: Repository to obtain. Never modified.

        Returns:
            Copy of ``repo_spec`` with ``dir`` set to the local checkout

        Raises:
            CloneError: If the repository could not be obtained
        """
        raise NotImplementedError

    def __call__(self, repo_spec: RepoSpec) -> RepoSpec:
        return self.clone(repo_spec)


class GitExecCloner(Cloner):
    """
    Clone with a local git install, reusing a cache slot per (org_repo, ref).

    Args:
        runner: Command runner (defaults to SubprocessRunner)
        cache: Resolver from cache key to confirmed directory
               (defaults to a CacheDirectory at the configured cache root)
        git_program: git executable name or path (defaults to configuration)
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        cache: Optional[Callable[[str], Path]] = None,
        git_program: Optional[str] = None,
    ):
        self.runner = runner if runner is not None else SubprocessRunner()
        self._cache = cache
        self.git_program = git_program or get_git_program()

    @property
    def cache(self) -> Callable[[str], Path]:
        # The default cache root is created on first use
        if self._cache is None:
            self._cache = CacheDirectory(get_clone_cache_dir())
        return self._cache

    def clone(self, repo_spec: RepoSpec) -> RepoSpec:
        git = shutil.which(self.git_program)
        if git is None:
            raise GitNotFoundError(self.git_program)

        # Default the ref before the cache key is built from it
        repo_spec = repo_spec.with_default_ref()
        target = self.cache(repo_spec.cache_key())

        if is_cached(target):
            logger.info(f"Using cached clone of {repo_spec} at {target}")
            return repo_spec.model_copy(update={"dir": target})

        clone_spec = repo_spec.clone_spec()
        logger.info(f"Cloning {clone_spec} at {repo_spec.ref} to {target}")

        result = self.runner.run(
            [git, "clone", "--depth=1", clone_spec, "-b", repo_spec.ref, str(target)]
        )
        if not result.ok:
            logger.error(f"Error cloning git repo: {result.output}")
            raise CloneFailedError(clone_spec, target, result.returncode, result.output)

        result = self.runner.run(
            [git, "submodule", "update", "--init", "--recursive"], cwd=target
        )
        if not result.ok:
            # The clone itself is kept; its .git makes the next call a cache hit
            raise SubmoduleUpdateError(
                clone_spec, target, result.returncode, result.output
            )

        logger.debug(f"Cloned {repo_spec} to {target}")
        return repo_spec.model_copy(update={"dir": target})


class DoNothingCloner(Cloner):
    """
    Cloner that only sets ``dir`` to a fixed directory.

    The directory is assumed to already hold the repository content, usually a
    fixture prepared by a test. Nothing is run and nothing is checked.
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def clone(self, repo_spec: RepoSpec) -> RepoSpec:
        return repo_spec.model_copy(update={"dir": self.directory})
