"""Gitstamp - Cached git repository metadata for build-time source transforms."""

__version__ = "0.1.0"

from .core.provider import GitProp, GitQuery, GitStatusProvider
from .core.repo_info import RepoInfo, get_repo_info

__all__ = ["GitProp", "GitQuery", "GitStatusProvider", "RepoInfo", "get_repo_info"]
