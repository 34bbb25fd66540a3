"""
Tokenizer for glint format strings.

The lexer splits a format string into a flat list of tokens for the
parser. It keeps just enough state to tell the two meanings of a comma
apart (argument delimiter directly inside a field's argument list,
separator everywhere else) and to know when it is reading a list of
style codes. Everything else, including delimiter matching, is left to
the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .errors import SourcePosition, UnrecognizedEscape, UnterminatedLiteral
from .nodes import GroupKind

SEPARATOR_CHARS = " |@_:;,."

FIELD_SYMBOLS = "+-"

_GROUP_OPENERS = {
    "(": GroupKind.PAREN,
    "{": GroupKind.CURLY,
    "[": GroupKind.SQUARE,
    "<": GroupKind.ANGLE,
}

_STYLE_CODE_BRACKETS = {"[": "]", "{": "}"}

DIGITS = "0123456789"

# Characters that end a list of style codes without being codes themselves.
_STYLE_LIST_END = "()'\\"

# Nesting contexts tracked by the lexer.
_ARGS = "args"
_STYLE = "style"

# Closing character -> contexts it may close.
_CLOSES = {
    ")": (GroupKind.PAREN.value, GroupKind.BARE.value, _ARGS, _STYLE),
    "}": (GroupKind.CURLY.value,),
    "]": (GroupKind.SQUARE.value,),
    ">": (GroupKind.ANGLE.value,),
}


class TokenKind(Enum):
    LITERAL = "literal"
    ESCAPED = "escaped"
    FIELD = "field"
    GROUP_OPEN = "group open"
    STYLE_OPEN = "style open"
    STYLE_CODE = "style code"
    STYLE_SEMI = "';'"
    LPAREN = "'('"
    RPAREN = "')'"
    RBRACE = "'}'"
    RBRACKET = "']'"
    RANGLE = "'>'"
    COMMA = "','"
    SEPARATOR = "separator"
    UNKNOWN = "unknown character"
    EOF = "end of input"


_CLOSER_KINDS = {
    ")": TokenKind.RPAREN,
    "}": TokenKind.RBRACE,
    "]": TokenKind.RBRACKET,
    ">": TokenKind.RANGLE,
}


@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    text holds the literal contents for LITERAL tokens, the identifier
    for FIELD tokens, the GroupKind value for GROUP_OPEN tokens and the
    raw source text for everything else. offset is the index of the
    token's first character in the format string.
    """

    kind: TokenKind
    text: str
    offset: int


def tokenize(source: str) -> List[Token]:
    """
    Split a format string into tokens, ending with an EOF token.

    Raises UnterminatedLiteral or UnrecognizedEscape for text that
    cannot be tokenized at all.
    """

    tokens: List[Token] = []
    contexts: List[str] = []
    i = 0

    while i < len(source):
        char = source[i]

        if char == "'":
            token, i = _read_literal(source, i)
            tokens.append(token)
        elif char == "\\":
            token, i = _read_escape(source, i)
            tokens.append(token)
            if token.kind is TokenKind.GROUP_OPEN:
                contexts.append(token.text)
            elif token.kind is TokenKind.FIELD and source.startswith("(", i):
                tokens.append(Token(TokenKind.LPAREN, "(", i))
                contexts.append(_ARGS)
                i += 1
        elif char == "#":
            tokens.append(Token(TokenKind.STYLE_OPEN, "#", i))
            i = _read_style_codes(source, i + 1, tokens)
            if source.startswith("(", i):
                tokens.append(Token(TokenKind.LPAREN, "(", i))
                contexts.append(_STYLE)
                i += 1
        elif char in _CLOSES:
            tokens.append(Token(_CLOSER_KINDS[char], char, i))
            if contexts and contexts[-1] in _CLOSES[char]:
                contexts.pop()
            i += 1
        elif char == "," and contexts and contexts[-1] == _ARGS:
            tokens.append(Token(TokenKind.COMMA, ",", i))
            i += 1
        elif char in SEPARATOR_CHARS:
            start = i
            while i < len(source) and source[i] in SEPARATOR_CHARS:
                if source[i] == "," and contexts and contexts[-1] == _ARGS:
                    break
                i += 1
            tokens.append(Token(TokenKind.SEPARATOR, source[start:i], start))
        elif char == "(":
            tokens.append(Token(TokenKind.LPAREN, "(", i))
            i += 1
        else:
            tokens.append(Token(TokenKind.UNKNOWN, char, i))
            i += 1

    tokens.append(Token(TokenKind.EOF, "", len(source)))
    return tokens


def _read_literal(source: str, start: int) -> Tuple[Token, int]:
    i = start + 1
    while i < len(source):
        char = source[i]
        if char == "'":
            return Token(TokenKind.LITERAL, source[start + 1 : i], start), i + 1
        if char == "\\":
            raise UnterminatedLiteral(
                "literal must be closed with a quote before a backslash",
                SourcePosition.from_offset(source, start),
            )
        i += 1

    raise UnterminatedLiteral(
        "missing closing quote for literal",
        SourcePosition.from_offset(source, start),
    )


def _read_escape(source: str, start: int) -> Tuple[Token, int]:
    """
    Read the construct introduced by a backslash at start.
    """

    i = start + 1
    if i >= len(source):
        raise UnrecognizedEscape(
            "backslash at end of format", SourcePosition.from_offset(source, start)
        )

    char = source[i]
    if char in _GROUP_OPENERS:
        return Token(TokenKind.GROUP_OPEN, _GROUP_OPENERS[char].value, start), i + 1
    if char == "g" and source.startswith("(", i + 1):
        return Token(TokenKind.GROUP_OPEN, GroupKind.BARE.value, start), i + 2
    if char in "\\'":
        return Token(TokenKind.ESCAPED, char, start), i + 1
    if char.isalpha() or char in FIELD_SYMBOLS:
        return Token(TokenKind.FIELD, char, start), i + 1

    raise UnrecognizedEscape(
        f"'\\{char}' is neither a field nor a group",
        SourcePosition.from_offset(source, start),
    )


def _read_style_codes(source: str, start: int, tokens: List[Token]) -> int:
    """
    Append the style code tokens following a '#' and return the index
    of the first character after them.

    The list ends at the first '(' or at end of input. Characters that
    are not valid codes still become STYLE_CODE tokens so the parser can
    report them as unknown codes.
    """

    i = start
    while i < len(source):
        char = source[i]
        if char in _STYLE_LIST_END:
            break
        if char == ";":
            tokens.append(Token(TokenKind.STYLE_SEMI, ";", i))
            i += 1
        elif char in _STYLE_CODE_BRACKETS:
            end = i + 1
            closer = _STYLE_CODE_BRACKETS[char]
            while end < len(source) and source[end] not in (closer, "("):
                end += 1
            if end < len(source) and source[end] == closer:
                end += 1
            tokens.append(Token(TokenKind.STYLE_CODE, source[i:end], i))
            i = end
        elif char in DIGITS:
            end = i
            while end < len(source) and source[end] in DIGITS:
                end += 1
            tokens.append(Token(TokenKind.STYLE_CODE, source[i:end], i))
            i = end
        else:
            tokens.append(Token(TokenKind.STYLE_CODE, char, i))
            i += 1
    return i
