"""Tests for repository metadata snapshots."""

import pytest
from pydantic import ValidationError

from gitstamp.core.repo_info import RepoInfo, get_repo_info


class TestRepoInfoModel:
    """Test the RepoInfo model."""

    def test_all_fields_optional(self):
        """An empty snapshot is valid."""
        info = RepoInfo()
        assert info.branch is None
        assert info.sha is None
        assert info.author_date is None
        assert info.last_tag is None

    def test_frozen(self):
        """Snapshots cannot be modified."""
        info = RepoInfo(branch="main")
        with pytest.raises(ValidationError):
            info.branch = "other"


class TestGetRepoInfo:
    """Test reading metadata from real repositories."""

    def test_not_a_repository(self, tmp_path):
        """A directory outside any repository yields an empty snapshot."""
        assert get_repo_info(tmp_path) == RepoInfo()

    def test_missing_path(self, tmp_path):
        """A path that does not exist yields an empty snapshot."""
        assert get_repo_info(tmp_path / "missing") == RepoInfo()

    def test_no_commits(self, empty_git_repo):
        """A new repository has a branch and root but no commit data."""
        info = get_repo_info(empty_git_repo)

        assert info.branch == "main"
        assert info.root == str(empty_git_repo)
        assert info.sha is None
        assert info.author_date is None
        assert info.last_tag is None

    def test_basic_commit(self, git_repo, git):
        """Commit metadata is read from HEAD."""
        info = get_repo_info(git_repo)

        assert info.branch == "main"
        assert info.sha == git(git_repo, "rev-parse", "HEAD")
        assert len(info.sha) == 40
        assert info.abbreviated_sha == info.sha[:10]
        assert info.author == "Test User <test@example.com>"
        assert info.committer == "Test User <test@example.com>"
        assert info.author_date == "2021-01-01T00:00:00+00:00"
        assert info.committer_date == "2021-01-01T00:00:00+00:00"
        assert info.commit_message == "Initial commit"
        assert info.tag is None
        assert info.last_tag is None
        assert info.commits_since_last_tag is None

    def test_subdirectory_finds_repository(self, git_repo):
        """Parent directories are searched for the repository."""
        sub = git_repo / "sub"
        sub.mkdir()

        info = get_repo_info(sub)

        assert info.branch == "main"
        assert info.root == str(git_repo)

    def test_tag_at_head(self, git_repo, git):
        """A tag on HEAD is both the current and the last tag."""
        git(git_repo, "tag", "v1.0.0")

        info = get_repo_info(git_repo)

        assert info.tag == "v1.0.0"
        assert info.last_tag == "v1.0.0"
        assert info.commits_since_last_tag == 0

    def test_commits_since_last_tag(self, git_repo, git):
        """Commits after the last tag are counted."""
        git(git_repo, "tag", "-a", "v1.0.0", "-m", "Release 1.0.0")
        (git_repo / "test.txt").write_text("second")
        git(git_repo, "commit", "-am", "Second commit")
        (git_repo / "test.txt").write_text("third")
        git(git_repo, "commit", "-am", "Third commit")

        info = get_repo_info(git_repo)

        assert info.tag is None
        assert info.last_tag == "v1.0.0"
        assert info.commits_since_last_tag == 2
        assert info.commit_message == "Third commit"

    def test_detached_head(self, git_repo, git):
        """Detached HEAD has no branch but still has a commit."""
        sha = git(git_repo, "rev-parse", "HEAD")
        git(git_repo, "checkout", "--detach")

        info = get_repo_info(git_repo)

        assert info.branch is None
        assert info.sha == sha
