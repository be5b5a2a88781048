"""Integration tests for GitExecCloner against a real git program."""

import shutil

import pytest
from dulwich import porcelain

from repoclone.filesys import CacheDirectory
from repoclone.git import GitExecCloner, SubprocessRunner, describe_cache
from repoclone.model import RepoSpec

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


class CountingRunner(SubprocessRunner):
    def __init__(self):
        self.calls = []

    def run(self, args, cwd=None):
        self.calls.append(tuple(args))
        return super().run(args, cwd=cwd)


@pytest.fixture
def upstream(tmp_path):
    """A local repository to clone from, with one commit on its active branch."""
    repo_dir = tmp_path / "upstream" / "project"
    repo_dir.mkdir(parents=True)
    repo = porcelain.init(str(repo_dir))
    (repo_dir / "hello.txt").write_text("hello")
    porcelain.add(str(repo_dir), paths=[str(repo_dir / "hello.txt")])
    porcelain.commit(
        str(repo_dir),
        message=b"initial commit",
        author=b"Test <test@test>",
        committer=b"Test <test@test>",
    )
    branch = porcelain.active_branch(repo).decode("utf-8")
    repo.close()
    return RepoSpec(
        org_repo="project",
        ref=branch,
        host=f"file://{repo_dir.parent}/",
        git_suffix="",
    )


@pytest.mark.integration
def test_clone_and_reuse(upstream, tmp_path):
    runner = CountingRunner()
    cache = CacheDirectory(tmp_path / "cache")
    cloner = GitExecCloner(runner=runner, cache=cache, git_program="git")

    first = cloner.clone(upstream)

    assert first.dir == tmp_path / "cache" / f"project{upstream.ref}"
    assert (first.dir / ".git").is_dir()
    assert (first.dir / "hello.txt").read_text() == "hello"
    assert len(runner.calls) == 2

    second = cloner.clone(upstream)

    assert second.dir == first.dir
    assert len(runner.calls) == 2

    (entry,) = describe_cache(tmp_path / "cache")
    assert entry["key"] == f"project{upstream.ref}"
    assert entry["branch"] == upstream.ref


@pytest.mark.integration
def test_clone_unknown_ref_fails(upstream, tmp_path):
    from repoclone.exceptions import CloneFailedError

    cloner = GitExecCloner(cache=CacheDirectory(tmp_path / "cache"), git_program="git")
    spec = upstream.model_copy(update={"ref": "does-not-exist"})

    with pytest.raises(CloneFailedError) as excinfo:
        cloner.clone(spec)

    assert excinfo.value.returncode != 0
    assert "does-not-exist" in excinfo.value.output


@pytest.mark.integration
def test_branch_with_slash_and_tag_prefix(upstream, tmp_path):
    """release/1.0 and release are cloned side by side, in either order."""
    upstream_dir = upstream.host[len("file://") :] + upstream.org_repo
    porcelain.branch_create(upstream_dir, "release/1.0")
    porcelain.tag_create(upstream_dir, b"release")
    cloner = GitExecCloner(cache=CacheDirectory(tmp_path / "cache"), git_program="git")

    branch = cloner.clone(upstream.model_copy(update={"ref": "release/1.0"}))
    tag = cloner.clone(upstream.model_copy(update={"ref": "release"}))

    assert branch.dir != tag.dir
    assert (branch.dir / "hello.txt").read_text() == "hello"
    assert (tag.dir / "hello.txt").read_text() == "hello"
    keys = [entry["key"] for entry in describe_cache(tmp_path / "cache")]
    assert keys == ["projectrelease", "projectrelease/1.0"]
