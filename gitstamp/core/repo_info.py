"""Repository metadata snapshot backed by GitPython."""

import logging
from pathlib import Path
from typing import Optional, Union

import git
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Length of the abbreviated commit sha
ABBREVIATED_SHA_LENGTH = 10


class RepoInfo(BaseModel):
    """Read-only snapshot of git repository metadata.

    Every field may be absent: the directory may not be a repository, the
    repository may have no commits, HEAD may be detached, and there may be
    no tags.
    """

    model_config = ConfigDict(frozen=True)

    branch: Optional[str] = Field(None, description="Active branch name")
    sha: Optional[str] = Field(None, description="Full HEAD commit sha")
    abbreviated_sha: Optional[str] = Field(None, description="Abbreviated HEAD sha")
    tag: Optional[str] = Field(None, description="Tag pointing exactly at HEAD")
    last_tag: Optional[str] = Field(
        None, description="Most recent tag reachable from HEAD"
    )
    commits_since_last_tag: Optional[int] = Field(
        None, description="Commits between last tag and HEAD"
    )
    author: Optional[str] = Field(None, description="HEAD commit author")
    author_date: Optional[str] = Field(
        None, description="HEAD author date (ISO-8601)"
    )
    committer: Optional[str] = Field(None, description="HEAD commit committer")
    committer_date: Optional[str] = Field(
        None, description="HEAD committer date (ISO-8601)"
    )
    commit_message: Optional[str] = Field(None, description="HEAD commit message")
    root: Optional[str] = Field(None, description="Working tree root directory")


def _format_actor(actor: git.Actor) -> str:
    if actor.email:
        return f"{actor.name} <{actor.email}>"
    return str(actor.name)


def _active_branch(repo: git.Repo) -> Optional[str]:
    if repo.head.is_detached:
        return None
    try:
        return repo.active_branch.name
    except TypeError:
        return None


def _last_tag(repo: git.Repo) -> tuple[Optional[str], Optional[int]]:
    """Return the most recent reachable tag and the commit count since it."""
    try:
        last_tag = repo.git.describe("--tags", "--abbrev=0")
    except git.GitCommandError:
        return None, None

    try:
        count = int(repo.git.rev_list("--count", f"{last_tag}..HEAD"))
    except (git.GitCommandError, ValueError):
        count = None
    return last_tag, count


def _tag_at(repo: git.Repo, commit: git.Commit) -> Optional[str]:
    for tag_ref in repo.tags:
        try:
            if tag_ref.commit == commit:
                return tag_ref.name
        except ValueError:
            # Tag pointing at a non-commit object
            continue
    return None


def get_repo_info(path: Union[str, Path, None] = None) -> RepoInfo:
    """
    Read repository metadata for the repository containing path.

    Parent directories are searched for the repository, as git itself does.

    Args:
        path: Directory inside the repository (default: current directory)

    Returns:
        RepoInfo snapshot. All fields are None when path is not inside a
        repository; only branch and root are set when it has no commits.
    """
    search_path = Path(path) if path is not None else Path.cwd()

    try:
        repo = git.Repo(search_path, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        logger.debug("No git repository found at %s", search_path)
        return RepoInfo()

    with repo:
        root = str(repo.working_tree_dir) if repo.working_tree_dir else None
        branch = _active_branch(repo)

        if not repo.head.is_valid():
            logger.debug("Repository at %s has no commits", root)
            return RepoInfo(branch=branch, root=root)

        commit = repo.head.commit
        last_tag, commits_since_last_tag = _last_tag(repo)
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")

        return RepoInfo(
            branch=branch,
            sha=commit.hexsha,
            abbreviated_sha=commit.hexsha[:ABBREVIATED_SHA_LENGTH],
            tag=_tag_at(repo, commit),
            last_tag=last_tag,
            commits_since_last_tag=commits_since_last_tag,
            author=_format_actor(commit.author),
            author_date=commit.authored_datetime.isoformat(),
            committer=_format_actor(commit.committer),
            committer_date=commit.committed_datetime.isoformat(),
            commit_message=message.strip(),
            root=root,
        )
