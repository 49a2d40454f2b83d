"""Lazily cached git metadata provider for build-time transforms."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import UnknownGitQueryError
from ..utils.formatters import (
    format_iso_timestamp,
    parse_iso_timestamp,
    to_unix_timestamp,
)
from .repo_info import RepoInfo, get_repo_info
from .status import is_dirty, is_tracked


QueryValue = Union[str, int]


class GitQuery(str, Enum):
    """Keys accepted by GitStatusProvider.query()."""

    BRANCH = "branch"
    COMMIT = "commit"
    ISO_TIMESTAMP = "isoTimestamp"
    UNIX_TIMESTAMP = "unixTimestamp"
    LATEST_TAG = "latestTag"


class GitProp(BaseModel):
    """Fully resolved set of git properties exposed to transforms."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    branch: str = Field(..., description="Branch name, empty when detached")
    commit: str = Field(..., description="Commit sha, empty without commits")
    iso_timestamp: str = Field(
        ..., alias="isoTimestamp", description="Author date (ISO-8601)"
    )
    unix_timestamp: int = Field(
        ..., alias="unixTimestamp", description="Author date (epoch seconds)"
    )
    latest_tag: str = Field(
        ..., alias="latestTag", description="Most recent tag, empty if none"
    )

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON using the camelCase query key names."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_yaml(self) -> str:
        """Serialize to YAML using the camelCase query key names."""
        data = self.model_dump(by_alias=True, mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)


class GitStatusProvider:
    """
    Cached accessor for git repository metadata.

    Tracked and dirty status and the unix timestamp are computed at
    construction. Query values are computed on first access and cached for
    the lifetime of the provider; the repository is assumed not to change
    during one run.
    """

    def __init__(
        self,
        cwd: Union[str, Path, None] = None,
        *,
        repo_info_loader: Callable[[Path], RepoInfo] = get_repo_info,
        git_executable: str = "git",
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize provider and take the repository snapshot.

        Args:
            cwd: Working directory of the build (default: current directory)
            repo_info_loader: Callable returning the RepoInfo snapshot for a
                directory; called exactly once
            git_executable: Git executable used for the dirty check
            logger: Logger for trace output (default: module logger)
            clock: Callable returning the current time (default: UTC now)

        Raises:
            GitStatusError: If `git status --porcelain` cannot be run
            ValueError: If the snapshot's author date is not ISO-8601
        """
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._props: dict[GitQuery, QueryValue] = {}

        self._tracked = is_tracked(self.cwd)
        self._dirty = is_dirty(self.cwd, git_executable=git_executable)

        self._repo_info = repo_info_loader(self.cwd)

        self._created_at = (clock or _utc_now)()
        if self._repo_info.author_date:
            self._unix_timestamp = to_unix_timestamp(
                parse_iso_timestamp(self._repo_info.author_date)
            )
        else:
            self._unix_timestamp = to_unix_timestamp(self._created_at)

        self.logger.debug(
            "Git provider for %s: tracked=%s dirty=%s",
            self.cwd,
            self._tracked,
            self._dirty,
        )

    @property
    def repo_info(self) -> RepoInfo:
        """Immutable repository snapshot taken at construction."""
        return self._repo_info

    def is_tracked(self) -> bool:
        return self._tracked

    def is_dirty(self) -> bool:
        return self._dirty

    def query(self, key: Union[GitQuery, str]) -> QueryValue:
        """
        Return a git property, resolving and caching it on first access.

        Args:
            key: GitQuery member or its string value (e.g., "branch")

        Returns:
            String value for branch, commit, isoTimestamp and latestTag;
            integer epoch seconds for unixTimestamp

        Raises:
            UnknownGitQueryError: If key is not a supported query
        """
        try:
            query = GitQuery(key)
        except ValueError:
            raise UnknownGitQueryError(key) from None

        with self._lock:
            if query in self._props:
                return self._props[query]

            self.logger.debug("Query once: Git repository for '%s'", query.value)
            self._resolve(query)
            return self._props[query]

    def props(self) -> GitProp:
        """Resolve every query key and return them as a GitProp."""
        return GitProp(**{query.value: self.query(query) for query in GitQuery})

    def _resolve(self, query: GitQuery) -> None:
        repo_info = self._repo_info

        if query is GitQuery.BRANCH:
            self._props[query] = repo_info.branch or ""
        elif query is GitQuery.COMMIT:
            self._props[query] = repo_info.sha or ""
        elif query in (GitQuery.ISO_TIMESTAMP, GitQuery.UNIX_TIMESTAMP):
            # Both timestamp keys are filled in one step
            self._props[GitQuery.ISO_TIMESTAMP] = (
                repo_info.author_date or format_iso_timestamp(self._created_at)
            )
            self._props[GitQuery.UNIX_TIMESTAMP] = self._unix_timestamp
        elif query is GitQuery.LATEST_TAG:
            self._props[query] = repo_info.last_tag or ""
        else:
            raise UnknownGitQueryError(query.value)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
