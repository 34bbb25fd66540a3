"""
Parsing of `git status --porcelain=v2 --branch` output for glint.

The parser converts the machine-readable status text into the counts
held by a StatusSnapshot. It only looks at the branch headers and the
two-letter XY status of each entry; paths, modes and object ids are
ignored because glint never displays individual files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from .domain import StatusSnapshot

_AHEAD_BEHIND_RE = re.compile(r"^\+(?P<ahead>\d+) -(?P<behind>\d+)$")

# Length of the abbreviated commit id shown in detached HEAD state.
SHORT_ID_LENGTH = 8

_INDEX_COUNTS = {
    "A": "staged_added",
    "M": "staged_modified",
    "R": "staged_renamed",
    "D": "staged_deleted",
}

_WORKTREE_COUNTS = {
    "M": "unstaged_modified",
    "D": "unstaged_deleted",
}


@dataclass
class BranchInfo:
    """
    Branch headers of a porcelain v2 status.

    oid is None for a repository without commits; head is None in
    detached HEAD state.
    """

    oid: Optional[str] = None
    head: Optional[str] = None
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0

    def display_name(self) -> str:
        """
        Return the name shown for HEAD, mimicking `git status`.

        Detached heads show a short commit id, or "HEAD" when there is
        no commit to point at.
        """

        if self.head is not None:
            return self.head
        if self.oid is not None:
            return self.oid[:SHORT_ID_LENGTH]
        return "HEAD"


def parse_porcelain_status(raw_status: str, stashed: int = 0) -> StatusSnapshot:
    """
    Parse porcelain v2 status text into a StatusSnapshot.

    The stash count is not part of `git status` output and is supplied
    by the caller.
    """

    branch = BranchInfo()
    counts: Dict[str, int] = {
        "staged_added": 0,
        "staged_modified": 0,
        "staged_renamed": 0,
        "staged_deleted": 0,
        "unstaged_modified": 0,
        "unstaged_deleted": 0,
        "untracked": 0,
        "unmerged": 0,
    }

    for line in raw_status.splitlines():
        if line.startswith("# "):
            _parse_header(line[2:], branch)
        elif line.startswith(("1 ", "2 ")):
            xy = line[2:4]
            index_field = _INDEX_COUNTS.get(xy[:1])
            if index_field is not None:
                counts[index_field] += 1
            worktree_field = _WORKTREE_COUNTS.get(xy[1:2])
            if worktree_field is not None:
                counts[worktree_field] += 1
        elif line.startswith("u "):
            counts["unmerged"] += 1
        elif line.startswith("? "):
            counts["untracked"] += 1
        # Ignored entries ("! ") are not counted.

    return StatusSnapshot(
        branch=branch.display_name(),
        upstream=branch.upstream,
        ahead=branch.ahead,
        behind=branch.behind,
        stashed=stashed,
        **counts,
    )


def _parse_header(header: str, branch: BranchInfo) -> None:
    key, _, value = header.partition(" ")
    value = value.strip()

    if key == "branch.oid":
        branch.oid = None if value == "(initial)" else value
    elif key == "branch.head":
        branch.head = None if value == "(detached)" else value
    elif key == "branch.upstream":
        branch.upstream = value or None
    elif key == "branch.ab":
        match = _AHEAD_BEHIND_RE.match(value)
        if match:
            branch.ahead = int(match.group("ahead"))
            branch.behind = int(match.group("behind"))
