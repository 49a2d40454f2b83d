"""Pytest configuration and shared fixtures for gitstamp tests."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from gitstamp.core.repo_info import RepoInfo

# Fixed author/committer date for reproducible commits
COMMIT_DATE = "2021-01-01T00:00:00+00:00"


def run_git(repo: Path, *args: str) -> str:
    """Run a git command in repo with a fixed identity and dates."""
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Test User",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test User",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "GIT_AUTHOR_DATE": COMMIT_DATE,
        "GIT_COMMITTER_DATE": COMMIT_DATE,
    }
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
        env=env,
    )
    return result.stdout.strip()


@pytest.fixture
def empty_git_repo(tmp_path):
    """Initialize a git repository on branch main with no commits."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    run_git(tmp_path, "init")
    run_git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(tmp_path, "config", "commit.gpgsign", "false")
    run_git(tmp_path, "config", "tag.gpgsign", "false")
    return tmp_path


@pytest.fixture
def git_repo(empty_git_repo):
    """Create a git repository with one commit on branch main."""
    (empty_git_repo / "test.txt").write_text("test")
    run_git(empty_git_repo, "add", ".")
    run_git(empty_git_repo, "commit", "-m", "Initial commit")
    return empty_git_repo


@pytest.fixture
def git():
    """Provide the git command helper to tests."""
    return run_git


@pytest.fixture
def make_loader():
    """Build a RepoInfo loader that records how often it is called."""

    def factory(**fields):
        calls = []

        def loader(path):
            calls.append(path)
            return RepoInfo(**fields)

        loader.calls = calls
        return loader

    return factory


@pytest.fixture
def clean_status(monkeypatch):
    """Stub out the dirty check so providers work outside a repository."""
    monkeypatch.setattr(
        "gitstamp.core.provider.is_dirty", lambda path, git_executable="git": False
    )
