"""
Custom exception types used across glint.

Format errors (lexing and parsing) always carry the position of the
offending character so the CLI can point at it. Render errors abort an
evaluation that is already under way. Git errors come from the status
provider and never from the core.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourcePosition:
    """
    A location inside a format string.

    offset is a zero-based character index; line and column are
    one-based and count characters, not bytes.
    """

    offset: int
    line: int
    column: int

    @classmethod
    def from_offset(cls, source: str, offset: int) -> "SourcePosition":
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(offset=offset, line=line, column=offset - line_start + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class GlintError(Exception):
    """Base class for all glint specific errors."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class FormatError(GlintError):
    """Raised when a format string cannot be turned into a tree."""

    def __init__(self, message: str, position: SourcePosition) -> None:
        super().__init__(f"{message} (at {position})")
        self.message = message
        self.position = position
        # Format string the error refers to, filled in by the pipeline.
        self.source: Optional[str] = None


class LexError(FormatError):
    """Raised when a format string cannot be split into tokens."""


class UnterminatedLiteral(LexError):
    """A quoted literal was not closed before a backslash or end of input."""


class UnrecognizedEscape(LexError):
    """A backslash was followed by something that is not a field or group."""


class ParseError(FormatError):
    """Raised when the token stream does not follow the format grammar."""


class UnmatchedDelimiter(ParseError):
    """A group, argument list, style body or colour code was not closed."""


class UnknownField(ParseError):
    """A field identifier does not name any status field."""


class UnknownStyleCode(ParseError):
    """A style code is not one of the known codes."""


class MalformedColorComponent(ParseError):
    """A colour code is not made of integers in the range 0-255."""


class UnexpectedToken(ParseError):
    """A token appeared where the grammar does not allow it."""


class TrailingInput(ParseError):
    """Tokens were left over after a complete top-level sequence."""


class RenderError(GlintError):
    """Raised when evaluation of a parsed format fails."""


class ArithmeticOverflow(RenderError):
    """A status count does not fit in the representable range."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.source: Optional[str] = None


class GitError(GlintError):
    """Raised when git operations fail."""


class NotARepositoryError(GitError):
    """Raised when the requested path is not inside a git work tree."""
