"""
High-level orchestration for glint.

This module ties the pieces together:
  - obtaining a status snapshot from git (or falling back to the
    alternate format outside a repository),
  - parsing the format string into a tree, and
  - rendering the tree with the requested styling options.

Every step runs to completion before the next starts; a failure in any
of them aborts the invocation without partial output.
"""

from __future__ import annotations

import logging

from .config import Config
from .domain import StatusSnapshot
from .errors import ArithmeticOverflow, FormatError, NotARepositoryError
from .evaluator import Evaluator
from .git_adapter import read_status
from .parser import parse
from .style import DEFAULT_CONTEXT, StyleEngine

LOG = logging.getLogger(__name__)


def render_format(
    format_string: str,
    snapshot: StatusSnapshot,
    *,
    color: bool = True,
    bash_prompt: bool = False,
) -> str:
    """
    Parse format_string and render it against snapshot.

    Non-empty colored output is framed by terminal resets so styles left
    open by earlier prompt text do not leak into it, and its own styles do
    not leak out. Format and render errors are re-raised with their
    source attribute set to format_string so callers can point at the
    problem.
    """

    styles = StyleEngine(enabled=color, bash_prompt=bash_prompt)
    try:
        tree = parse(format_string)
        result = Evaluator(snapshot, styles).render(tree)
    except (FormatError, ArithmeticOverflow) as exc:
        exc.source = format_string
        raise

    if result.is_empty:
        return ""
    reset = styles.escape(DEFAULT_CONTEXT)
    return reset + result.text + reset


def run_prompt(config: Config) -> str:
    """
    Render the prompt described by config for the repository at config.path.

    Outside a repository the alternate format is rendered against an
    empty snapshot when one is configured; otherwise
    NotARepositoryError propagates.
    """

    try:
        snapshot = read_status(config.path)
        format_string = config.format
    except NotARepositoryError:
        if config.else_format is None:
            raise
        LOG.info("Not inside a git repository; using the alternate format")
        snapshot = StatusSnapshot.outside_repository()
        format_string = config.else_format

    return render_format(
        format_string,
        snapshot,
        color=config.color,
        bash_prompt=config.bash_escapes,
    )
