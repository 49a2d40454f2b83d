"""Exception types raised by gitstamp."""

from pathlib import Path
from typing import Optional


class GitstampError(Exception):
    """Base class for gitstamp errors."""


class GitStatusError(GitstampError):
    """Raised when `git status --porcelain` cannot be run or exits non-zero."""

    def __init__(self, cwd: Path, message: str, stderr: Optional[str] = None):
        self.cwd = cwd
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr and stderr.strip() else ""
        super().__init__(f"{message} (in {cwd}){detail}")


class UnknownGitQueryError(GitstampError, NotImplementedError):
    """Raised when a query key outside the supported set is requested."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"not implemented: {key}")


class ConfigError(GitstampError):
    """Raised when a configuration file cannot be loaded or validated."""
