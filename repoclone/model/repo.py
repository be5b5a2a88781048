# Data model for the repositories handed to a cloner

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Ref checked out when a spec does not name one
DEFAULT_REF = "master"


class RepoSpec(BaseModel):
    """Identity of a repository to clone and, once cloned, where it lives.

    The model is frozen: cloners never mutate the spec they receive, they
    return a resolved copy instead (see ``repoclone.git.cloner``).

    Attributes:
        org_repo: organization/repository locator, e.g. ``example/repo``
        ref: branch, tag or commit-ish. Empty means the primary branch.
        host: prefix of the clone URL
        git_suffix: suffix of the clone URL
        dir: local checkout directory, unset until a cloner fills it
    """

    model_config = ConfigDict(frozen=True)

    org_repo: str
    ref: str = ""
    host: str = "https://github.com/"
    git_suffix: str = ".git"
    dir: Optional[Path] = None

    @field_validator("org_repo")
    @classmethod
    def org_repo_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("org_repo must be a non-empty locator")
        return value

    def clone_spec(self) -> str:
        """Full URL handed to ``git clone``."""
        return f"{self.host}{self.org_repo}{self.git_suffix}"

    def with_default_ref(self) -> "RepoSpec":
        """Return a copy whose ref falls back to ``DEFAULT_REF`` when empty."""
        if self.ref:
            return self
        return self.model_copy(update={"ref": DEFAULT_REF})

    def cache_key(self) -> str:
        """
        Key of the cache slot holding this repository.

        Locator and ref are concatenated with no separator. The ref is
        defaulted first, so an empty ref and ``master`` share a slot.
        """
        return self.org_repo + self.with_default_ref().ref

    def __str__(self) -> str:
        return f"{self.clone_spec()}@{self.ref or DEFAULT_REF}"
