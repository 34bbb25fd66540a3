"""
Syntax tree for glint format strings.

The parser builds these nodes once per format string and the evaluator
walks them. Nodes are frozen dataclasses that exclusively own their
children, so a tree can be shared freely once built. Every node can be
written back to format source with to_source().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .style import StyleCode


class GroupKind(Enum):
    PAREN = "paren"
    CURLY = "curly"
    SQUARE = "square"
    ANGLE = "angle"
    BARE = "bare"

    @property
    def opener(self) -> str:
        """Source text that opens a group of this kind."""
        return _GROUP_SOURCE[self][0]

    @property
    def closer(self) -> str:
        return _GROUP_SOURCE[self][1]

    @property
    def left(self) -> str:
        """Delimiter written before the group's rendered contents."""
        return _GROUP_DELIMITERS[self][0]

    @property
    def right(self) -> str:
        return _GROUP_DELIMITERS[self][1]


_GROUP_SOURCE = {
    GroupKind.PAREN: ("\\(", ")"),
    GroupKind.CURLY: ("\\{", "}"),
    GroupKind.SQUARE: ("\\[", "]"),
    GroupKind.ANGLE: ("\\<", ">"),
    GroupKind.BARE: ("\\g(", ")"),
}

_GROUP_DELIMITERS = {
    GroupKind.PAREN: ("(", ")"),
    GroupKind.CURLY: ("{", "}"),
    GroupKind.SQUARE: ("[", "]"),
    GroupKind.ANGLE: ("<", ">"),
    GroupKind.BARE: ("", ""),
}


@dataclass(frozen=True)
class Literal:
    """Raw characters, rendered exactly as written."""

    text: str

    def to_source(self) -> str:
        parts = []
        chunk = ""
        for char in self.text:
            if char in "\\'":
                if chunk:
                    parts.append(f"'{chunk}'")
                    chunk = ""
                parts.append("\\" + char)
            else:
                chunk += char
        if chunk or not parts:
            parts.append(f"'{chunk}'")
        return "".join(parts)


@dataclass(frozen=True)
class Field:
    """
    A named status field, optionally with arguments replacing its prefix.

    offset points at the backslash introducing the field and is only
    used for diagnostics; it does not take part in equality.
    """

    id: str
    args: Tuple["Sequence", ...] = ()
    offset: int = field(default=0, compare=False)

    def to_source(self) -> str:
        source = "\\" + self.id
        if self.args:
            source += "(" + ",".join(arg.to_source() for arg in self.args) + ")"
        return source


@dataclass(frozen=True)
class Group:
    kind: GroupKind
    body: "Sequence"

    def to_source(self) -> str:
        return self.kind.opener + self.body.to_source() + self.kind.closer


@dataclass(frozen=True)
class Style:
    codes: Tuple[StyleCode, ...]
    body: "Sequence"

    def to_source(self) -> str:
        codes = ";".join(code.source for code in self.codes)
        return f"#{codes}({self.body.to_source()})"


Element = Union[Literal, Field, Group, Style]


@dataclass(frozen=True)
class Sequence:
    """
    Ordered elements joined by separator runs.

    Each item pairs the verbatim separator run written before an element
    (possibly empty) with the element itself. A separator run after the
    last element is kept in trailing so the source can be reproduced,
    but it is never rendered.
    """

    items: Tuple[Tuple[str, Element], ...] = ()
    trailing: str = ""

    @property
    def elements(self) -> Tuple[Element, ...]:
        return tuple(element for _, element in self.items)

    def to_source(self) -> str:
        return "".join(sep + element.to_source() for sep, element in self.items) + self.trailing


FormatNode = Union[Literal, Field, Group, Style, Sequence]
