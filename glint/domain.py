"""
Core domain models for glint.

These dataclasses describe the repository status consumed by the
evaluator, the result of rendering a node, and the table of status
fields a format string may reference. They intentionally avoid any
direct git dependency so the renderer can be exercised with hand-built
snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

# Counts are treated as unsigned 32-bit values.
MAX_COUNT = 2**32 - 1


@dataclass(frozen=True)
class StatusSnapshot:
    """
    Immutable summary of a working tree, read once per invocation.

    branch is the current branch name, a short commit id in detached
    HEAD state, or "HEAD" when neither is available. ahead and behind
    only mean something when upstream is set.
    """

    branch: str
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    staged_added: int = 0
    staged_modified: int = 0
    staged_renamed: int = 0
    staged_deleted: int = 0
    unstaged_modified: int = 0
    unstaged_deleted: int = 0
    untracked: int = 0
    unmerged: int = 0
    stashed: int = 0

    @classmethod
    def outside_repository(cls) -> "StatusSnapshot":
        """
        Snapshot used to render the alternate format outside a repository.

        Every field is absent or zero, so only literals render.
        """

        return cls(branch="")


@dataclass(frozen=True)
class RenderResult:
    """
    Text produced by evaluating a node.

    is_empty is the only signal used to suppress brackets, separators
    and style escapes around a node.
    """

    text: str
    is_empty: bool

    @classmethod
    def empty(cls) -> "RenderResult":
        return cls(text="", is_empty=True)


@dataclass(frozen=True)
class FieldSpec:
    """
    Description of one status field available in formats.
    """

    id: str
    name: str
    attribute: str
    value_type: Literal["text", "count"]
    prefix: str = ""
    requires_upstream: bool = False


FIELDS: Dict[str, FieldSpec] = {
    spec.id: spec
    for spec in (
        FieldSpec("b", "branch", "branch", "text"),
        FieldSpec("B", "upstream", "upstream", "text"),
        FieldSpec("+", "ahead", "ahead", "count", "+", requires_upstream=True),
        FieldSpec("-", "behind", "behind", "count", "-", requires_upstream=True),
        FieldSpec("u", "unmerged", "unmerged", "count", "U"),
        FieldSpec("A", "staged added", "staged_added", "count", "A"),
        FieldSpec("a", "untracked", "untracked", "count", "?"),
        FieldSpec("M", "staged modified", "staged_modified", "count", "M"),
        FieldSpec("m", "unstaged modified", "unstaged_modified", "count", "M"),
        FieldSpec("D", "staged deleted", "staged_deleted", "count", "D"),
        FieldSpec("d", "unstaged deleted", "unstaged_deleted", "count", "D"),
        FieldSpec("R", "staged renamed", "staged_renamed", "count", "R"),
        FieldSpec("h", "stashed", "stashed", "count", "H"),
    )
}
