from .repo import DEFAULT_REF, RepoSpec

__all__ = ["DEFAULT_REF", "RepoSpec"]
