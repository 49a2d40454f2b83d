"""Working tree status checks: tracked and dirty."""

import logging
import subprocess
from pathlib import Path
from typing import Union

from ..exceptions import GitStatusError

logger = logging.getLogger(__name__)


def is_tracked(path: Union[str, Path]) -> bool:
    """Check whether path holds a `.git` entry directly beneath it.

    Parent directories are not searched.
    """
    return (Path(path) / ".git").exists()


def is_dirty(path: Union[str, Path], git_executable: str = "git") -> bool:
    """
    Check whether the working tree at path has uncommitted changes.

    Runs `git status --porcelain` synchronously; the tree is dirty when the
    output is non-empty after stripping whitespace.

    Args:
        path: Working directory to run git in
        git_executable: Git executable name or path (default: "git")

    Returns:
        True if there are uncommitted or untracked changes

    Raises:
        GitStatusError: If git is not installed or exits non-zero
            (e.g., path is not inside a repository)
    """
    cwd = Path(path)
    cmd = [git_executable, "status", "--porcelain"]

    try:
        result = subprocess.run(
            cmd, cwd=cwd, capture_output=True, text=True, check=True
        )
    except FileNotFoundError as e:
        raise GitStatusError(cwd, f"git executable not found: {git_executable}") from e
    except subprocess.CalledProcessError as e:
        raise GitStatusError(
            cwd, f"git status exited with code {e.returncode}", stderr=e.stderr
        ) from e

    dirty = len(result.stdout.strip()) > 0
    logger.debug("Working tree at %s is %s", cwd, "dirty" if dirty else "clean")
    return dirty
