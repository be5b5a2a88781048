"""
Git operations for repoclone.

Cloners obtain a local checkout of a ``RepoSpec``; the cache helpers inspect
and clean the directories GitExecCloner fills.
"""

from .cache import clear_cache, describe_cache, is_cached
from .cloner import Cloner, DoNothingCloner, GitExecCloner
from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = [
    "Cloner",
    "GitExecCloner",
    "DoNothingCloner",
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "is_cached",
    "describe_cache",
    "clear_cache",
]
