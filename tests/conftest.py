import io
import logging
from pathlib import Path

import pytest

from repoclone.filesys import CacheDirectory
from repoclone.git.runner import CommandResult

from tests.runner import RecordingRunner

FAKE_GIT = "/usr/bin/git"


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("repoclone")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture(autouse=True)
def reset_repoclone_logger():
    """Drop handlers installed by CLI invocations so they don't outlive the test."""
    logger = logging.getLogger("repoclone")
    handlers = list(logger.handlers)
    level = logger.level

    yield

    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


# git fixtures


@pytest.fixture
def fake_git(monkeypatch):
    """Pretend git is installed, without requiring it on PATH."""
    monkeypatch.setattr(
        "repoclone.git.cloner.shutil.which",
        lambda program: FAKE_GIT if program == "git" else None,
    )
    return FAKE_GIT


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def cache(cache_root):
    return CacheDirectory(cache_root)


@pytest.fixture
def recording_runner():
    """Runner where every command succeeds."""
    return RecordingRunner()


@pytest.fixture
def cloning_runner():
    """Runner that simulates a successful clone by creating the .git directory."""

    def fake_clone(args, cwd):
        if args[1] == "clone":
            target = args[-1]
            (Path(target) / ".git").mkdir(parents=True)
        return CommandResult(args=tuple(args), returncode=0)

    return RecordingRunner(side_effect=fake_clone)
