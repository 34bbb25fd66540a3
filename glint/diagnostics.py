"""
Human-readable error reports for glint.

Format errors are shown with the offending line of the format string
and a caret under the reported column, e.g.

    error: unable to parse format (UnmatchedDelimiter at 1:12)
     │
     │    \\<\\b\\(\\+\\->
     │               ^ reached end without finding ')' ...

Reports are plain strings; writing them out is up to the caller.
"""

from __future__ import annotations

from typing import List

from .errors import ArithmeticOverflow, FormatError, GlintError, SourcePosition
from .style import NAMED_CODES, StyleEngine

_ERROR_CODES = (NAMED_CODES["r"], NAMED_CODES["*"])
_BOLD_CODES = (NAMED_CODES["*"],)


def describe_error(error: GlintError, color: bool = False) -> str:
    """
    Return a report for error, pointing into the format when possible.
    """

    styles = StyleEngine(enabled=color)
    label = styles.paint("error", _ERROR_CODES)

    if isinstance(error, FormatError) and error.source is not None:
        return _source_report(
            styles,
            f"{label}: unable to parse format ({error.kind} at {error.position})",
            error.source,
            error.position,
            error.message,
        )

    if isinstance(error, ArithmeticOverflow) and error.source is not None and error.offset is not None:
        position = SourcePosition.from_offset(error.source, error.offset)
        return _source_report(
            styles,
            f"{label}: unable to render format ({error.kind} at {position})",
            error.source,
            position,
            error.message,
        )

    return f"{label}: {error}"


def _source_report(
    styles: StyleEngine,
    heading: str,
    source: str,
    position: SourcePosition,
    message: str,
) -> str:
    lines = source.splitlines() or [""]
    line_text = lines[position.line - 1] if position.line <= len(lines) else ""
    bar = styles.paint("│", _BOLD_CODES)
    caret = styles.paint("^", _ERROR_CODES)

    report: List[str] = [
        heading,
        f" {bar}",
        f" {bar}    {line_text}",
        f" {bar}    {' ' * (position.column - 1)}{caret} {message}",
    ]
    return "\n".join(report)
