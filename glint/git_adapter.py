"""
Git integration for glint.

This module is responsible for interacting with the git CLI to find out
whether a path is inside a work tree and to read the status information
rendered by a format. All git invocations go through _run_git so that
error handling and logging are centralized.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional

from .domain import StatusSnapshot
from .errors import GitError, NotARepositoryError
from .status_parser import parse_porcelain_status

LOG = logging.getLogger(__name__)


def _run_git(
    args: list[str],
    cwd: Optional[str] = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    Optional locks are disabled because prompts run git constantly in
    the background of other git commands. With check=False a non-zero
    exit status is returned to the caller instead of raising.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    env = dict(os.environ, GIT_OPTIONAL_LOCKS="0")
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
            env=env,
        )
    except OSError as exc:  # noqa: BLE001
        raise GitError(f"failed to execute git: {exc}") from exc

    if check and completed.returncode != 0:
        LOG.debug("git stderr: %s", completed.stderr)
        details = completed.stderr.strip()
        message = f"git command failed: {' '.join(cmd)}"
        if details:
            message = f"{message}: {details}"
        raise GitError(message)

    return completed


def ensure_repository(path: Optional[str] = None) -> None:
    """
    Raise NotARepositoryError unless path is inside a git work tree.
    """

    completed = _run_git(["rev-parse", "--is-inside-work-tree"], cwd=path, check=False)
    if completed.returncode != 0 or completed.stdout.strip() != "true":
        LOG.debug("git rev-parse stderr: %s", completed.stderr)
        raise NotARepositoryError(f"not a git repository: {path or os.getcwd()}")


def read_stash_count(path: Optional[str] = None) -> int:
    """
    Return the number of entries in the stash.
    """

    output = _run_git(["stash", "list"], cwd=path).stdout
    return sum(1 for line in output.splitlines() if line.strip())


def read_status(path: Optional[str] = None) -> StatusSnapshot:
    """
    Read the status of the work tree containing path.

    Raises NotARepositoryError when path is not inside a work tree and
    GitError when any git command fails.
    """

    ensure_repository(path)
    raw_status = _run_git(
        ["status", "--porcelain=v2", "--branch", "--untracked-files=all"],
        cwd=path,
    ).stdout
    stashed = read_stash_count(path)

    snapshot = parse_porcelain_status(raw_status, stashed=stashed)
    LOG.debug("Read status snapshot: %s", snapshot)
    return snapshot
