"""
Exception classes raised while acquiring repositories.
"""

from pathlib import Path
from typing import Union


class CloneError(Exception):
    """Base exception for all errors raised while acquiring a repository."""

    pass


class GitNotFoundError(CloneError):
    """Raised when the git program cannot be found on PATH."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"no '{program}' program on path")


class CacheDirectoryError(CloneError):
    """Raised when a cache directory cannot be resolved or created."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        if reason:
            super().__init__(f"Cannot prepare cache directory for '{key}': {reason}")
        else:
            super().__init__(f"Cannot prepare cache directory for '{key}'")


class CloneFailedError(CloneError):
    """Raised when ``git clone`` exits with a non-zero status."""

    def __init__(
        self,
        clone_spec: str,
        directory: Union[str, Path],
        returncode: int,
        output: str = "",
    ):
        self.clone_spec = clone_spec
        self.directory = Path(directory)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"trouble cloning git repo {clone_spec} in {directory} "
            f"(exit status {returncode})"
        )


class SubmoduleUpdateError(CloneError):
    """Raised when ``git submodule update`` exits with a non-zero status."""

    def __init__(
        self,
        clone_spec: str,
        directory: Union[str, Path],
        returncode: int,
        output: str = "",
    ):
        self.clone_spec = clone_spec
        self.directory = Path(directory)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"trouble fetching submodules for {clone_spec} (exit status {returncode})"
        )
