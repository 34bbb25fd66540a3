import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest


pytestmark = pytest.mark.skipif(
    shutil.which("git") is None,
    reason="git executable not available",
)


def _run_git(args, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def _run_glint(args, cwd: Path, ceiling: Path) -> subprocess.CompletedProcess[str]:
    # Run the CLI as a module in a subprocess, pointing PYTHONPATH at the
    # project root so the package can be imported from the temporary directory.
    project_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(project_root)
    env["GIT_CEILING_DIRECTORIES"] = str(ceiling)
    env.pop("GLINT_FORMAT", None)
    env.pop("NO_COLOR", None)

    return subprocess.run(
        [sys.executable, "-m", "glint.cli", *args],
        cwd=str(cwd),
        env=env,
        text=True,
        capture_output=True,
    )


def test_cli_describes_temporary_repo(tmp_path):
    """
    End-to-end test that exercises the CLI against a real git repository.

    The repository has one commit on main, then:
      - a new file staged for commit,
      - a tracked file modified but not staged, and
      - an untracked file.
    """

    repo = tmp_path / "repo"
    repo.mkdir()

    _run_git(["init"], cwd=repo)
    _run_git(["symbolic-ref", "HEAD", "refs/heads/main"], cwd=repo)
    _run_git(["config", "user.name", "glint"], cwd=repo)
    _run_git(["config", "user.email", "glint@example.com"], cwd=repo)

    (repo / "tracked.txt").write_text("one\n")
    _run_git(["add", "tracked.txt"], cwd=repo)
    _run_git(["-c", "commit.gpgsign=false", "commit", "-m", "base"], cwd=repo)

    (repo / "tracked.txt").write_text("two\n")
    (repo / "staged.txt").write_text("new\n")
    _run_git(["add", "staged.txt"], cwd=repo)
    (repo / "untracked.txt").write_text("loose\n")

    result = _run_glint(["\\b\\[\\A\\m\\a]", "--no-color"], cwd=repo, ceiling=tmp_path)
    assert result.returncode == 0, result.stderr
    assert result.stdout == "main[A1M1?1]\n"

    result = _run_glint(["-b", "#g(\\b)"], cwd=repo, ceiling=tmp_path)
    assert result.returncode == 0, result.stderr
    reset = "\x01\x1b[0m\x02"
    assert result.stdout == f"{reset}\x01\x1b[0;32m\x02main{reset}{reset}\n"


def test_cli_outside_repository(tmp_path):
    plain = tmp_path / "plain"
    plain.mkdir()

    result = _run_glint(["\\b", "-e", "'nope'", "--no-color"], cwd=plain, ceiling=tmp_path)
    assert result.returncode == 0, result.stderr
    assert result.stdout == "nope\n"

    result = _run_glint(["\\b", "--no-color"], cwd=plain, ceiling=tmp_path)
    assert result.returncode == 1
    assert result.stdout == ""
    assert "not a git repository" in result.stderr
