"""
Format string parser for glint.

The parser is a recursive descent over the token list produced by the
lexer. Each production is a plain function taking the token list and a
start index and returning the parsed node together with the index of
the first token it did not consume, so there is no parser object and no
backtracking.

Field identifiers and style codes are resolved here rather than during
evaluation: a tree returned by parse() only references fields that
exist and colours that are in range.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .domain import FIELDS
from .errors import (
    MalformedColorComponent,
    SourcePosition,
    TrailingInput,
    UnexpectedToken,
    UnknownField,
    UnknownStyleCode,
    UnmatchedDelimiter,
)
from .lexer import DIGITS, Token, TokenKind, tokenize
from .nodes import Element, Field, Group, GroupKind, Literal, Sequence, Style
from .style import NAMED_CODES, StyleCode, indexed_foreground, rgb_background, rgb_foreground

LOG = logging.getLogger(__name__)

_ELEMENT_STARTS = {
    TokenKind.LITERAL,
    TokenKind.ESCAPED,
    TokenKind.FIELD,
    TokenKind.GROUP_OPEN,
    TokenKind.STYLE_OPEN,
}

_GROUP_CLOSERS = {
    GroupKind.PAREN: TokenKind.RPAREN,
    GroupKind.CURLY: TokenKind.RBRACE,
    GroupKind.SQUARE: TokenKind.RBRACKET,
    GroupKind.ANGLE: TokenKind.RANGLE,
    GroupKind.BARE: TokenKind.RPAREN,
}

_CLOSER_TEXT = {
    TokenKind.RPAREN: ")",
    TokenKind.RBRACE: "}",
    TokenKind.RBRACKET: "]",
    TokenKind.RANGLE: ">",
}


def parse(source: str) -> Sequence:
    """
    Parse a complete format string into a Sequence.

    An empty format parses to an empty Sequence. Raises a LexError or
    ParseError subclass, always carrying the source position.
    """

    tokens = tokenize(source)
    sequence, i = _parse_sequence(source, tokens, 0)

    token = tokens[i]
    if token.kind is not TokenKind.EOF:
        if token.kind in _CLOSER_TEXT:
            message = f"{_describe(token)} does not close anything"
        else:
            message = f"unexpected {_describe(token)} after end of format"
        raise TrailingInput(message, _position(source, token))

    LOG.debug("Parsed format %r into %d top-level elements", source, len(sequence.items))
    return sequence


def _position(source: str, token: Token) -> SourcePosition:
    return SourcePosition.from_offset(source, token.offset)


def _describe(token: Token) -> str:
    if token.kind is TokenKind.EOF:
        return "end of input"
    return repr(token.text)


def _parse_sequence(source: str, tokens: List[Token], start: int) -> Tuple[Sequence, int]:
    """
    Parse elements and their separator runs until a token that cannot
    start an element.

    Returns a tuple of (Sequence, next_index).
    """

    i = start
    items: List[Tuple[str, Element]] = []
    pending = ""

    while True:
        token = tokens[i]
        if token.kind is TokenKind.SEPARATOR:
            pending += token.text
            i += 1
        elif token.kind in _ELEMENT_STARTS:
            element, i = _parse_element(source, tokens, i)
            items.append((pending, element))
            pending = ""
        elif token.kind is TokenKind.UNKNOWN:
            raise UnexpectedToken(
                f"{_describe(token)} is not a valid expression; quote literal text",
                _position(source, token),
            )
        elif token.kind is TokenKind.LPAREN:
            raise UnexpectedToken(
                "'(' must directly follow a field or a style", _position(source, token)
            )
        else:
            break

    return Sequence(items=tuple(items), trailing=pending), i


def _parse_element(source: str, tokens: List[Token], i: int) -> Tuple[Element, int]:
    token = tokens[i]
    if token.kind in (TokenKind.LITERAL, TokenKind.ESCAPED):
        return Literal(token.text), i + 1
    if token.kind is TokenKind.FIELD:
        return _parse_field(source, tokens, i)
    if token.kind is TokenKind.GROUP_OPEN:
        return _parse_group(source, tokens, i)
    return _parse_style(source, tokens, i)


def _expect_closer(
    source: str,
    tokens: List[Token],
    i: int,
    closer: TokenKind,
    opener: Token,
    what: str,
) -> int:
    """
    Consume the closing token for a construct opened by opener.
    """

    token = tokens[i]
    if token.kind is closer:
        return i + 1

    opened_at = _position(source, opener)
    expected = _CLOSER_TEXT[closer]
    if token.kind is TokenKind.EOF:
        message = f"reached end without finding '{expected}' to close {what} opened at {opened_at}"
    else:
        message = f"expected '{expected}' to close {what} opened at {opened_at}, found {_describe(token)}"
    raise UnmatchedDelimiter(message, _position(source, token))


def _parse_field(source: str, tokens: List[Token], i: int) -> Tuple[Field, int]:
    token = tokens[i]
    if token.text not in FIELDS:
        raise UnknownField(
            f"'\\{token.text}' is not a known field", _position(source, token)
        )
    i += 1

    if tokens[i].kind is not TokenKind.LPAREN:
        return Field(id=token.text, offset=token.offset), i

    opener = tokens[i]
    args: List[Sequence] = []
    arg, i = _parse_sequence(source, tokens, i + 1)
    args.append(arg)
    while tokens[i].kind is TokenKind.COMMA:
        arg, i = _parse_sequence(source, tokens, i + 1)
        args.append(arg)

    i = _expect_closer(source, tokens, i, TokenKind.RPAREN, opener, "argument list")
    return Field(id=token.text, args=tuple(args), offset=token.offset), i


def _parse_group(source: str, tokens: List[Token], i: int) -> Tuple[Group, int]:
    opener = tokens[i]
    kind = GroupKind(opener.text)
    body, i = _parse_sequence(source, tokens, i + 1)
    i = _expect_closer(source, tokens, i, _GROUP_CLOSERS[kind], opener, f"{kind.value} group")
    return Group(kind=kind, body=body), i


def _parse_style(source: str, tokens: List[Token], i: int) -> Tuple[Style, int]:
    opener = tokens[i]
    i += 1

    codes: List[StyleCode] = []
    after_semicolon = False
    while True:
        token = tokens[i]
        if token.kind is TokenKind.STYLE_CODE:
            codes.append(_parse_style_code(source, token))
            after_semicolon = False
        elif token.kind is TokenKind.STYLE_SEMI:
            if not codes or after_semicolon:
                raise UnexpectedToken(
                    "';' may only appear between two style codes", _position(source, token)
                )
            after_semicolon = True
        else:
            break
        i += 1

    token = tokens[i]
    if not codes:
        raise UnexpectedToken(
            f"expected a style code after '#', found {_describe(token)}",
            _position(source, token),
        )
    if after_semicolon:
        raise UnexpectedToken(
            "';' may only appear between two style codes", _position(source, tokens[i - 1])
        )
    if token.kind is not TokenKind.LPAREN:
        raise UnexpectedToken(
            f"expected '(' after style codes, found {_describe(token)}",
            _position(source, token),
        )

    body, i = _parse_sequence(source, tokens, i + 1)
    i = _expect_closer(source, tokens, i, TokenKind.RPAREN, opener, "style")
    return Style(codes=tuple(codes), body=body), i


def _parse_style_code(source: str, token: Token) -> StyleCode:
    text = token.text
    position = _position(source, token)

    named = NAMED_CODES.get(text)
    if named is not None:
        return named

    if text[0] in "[{":
        closer = "]" if text[0] == "[" else "}"
        if len(text) < 2 or not text.endswith(closer):
            raise UnmatchedDelimiter(f"colour code is missing its closing '{closer}'", position)
        red, green, blue = _color_components(text[1:-1], position)
        if closer == "]":
            return rgb_foreground(red, green, blue)
        return rgb_background(red, green, blue)

    if all(char in DIGITS for char in text):
        return indexed_foreground(_color_component(text, position))

    raise UnknownStyleCode(f"{text!r} is not a style", position)


def _color_components(body: str, position: SourcePosition) -> Tuple[int, int, int]:
    parts = body.split(",")
    if len(parts) != 3:
        raise MalformedColorComponent(
            "RGB colour must be three comma separated values, e.g. '0,0,0'", position
        )
    red, green, blue = (_color_component(part, position) for part in parts)
    return red, green, blue


def _color_component(text: str, position: SourcePosition) -> int:
    if not text or any(char not in DIGITS for char in text):
        raise MalformedColorComponent(f"{text!r} is not a colour value", position)
    value = int(text)
    if value > 255:
        raise MalformedColorComponent(f"colour value {value} is outside 0-255", position)
    return value
