"""
Terminal styling for glint.

A style node in a format carries one or more style codes. Codes are
resolved against the style context of the enclosing node to produce a
new context, and a context serializes to a single ANSI SGR escape
sequence. Contexts are immutable values so that nested styles can be
restored by simply re-emitting the enclosing context.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional

ESC = "\x1b"

# Readline markers for zero-width text inside bash prompts.
BASH_START = "\x01"
BASH_END = "\x02"

RESET = "reset"
FOREGROUND = "foreground"
BACKGROUND = "background"
BOLD = "bold"
ITALIC = "italic"
UNDERLINE = "underline"


@dataclass(frozen=True)
class StyleCode:
    """
    A single resolved style code.

    source is the canonical spelling of the code inside a format string,
    category the style category it controls and sgr the SGR parameters
    it contributes (empty for reset and the boolean attributes).
    """

    source: str
    category: str
    sgr: str = ""


_NAMED_COLORS = {
    "k": "0",
    "r": "1",
    "g": "2",
    "y": "3",
    "b": "4",
    "m": "5",
    "c": "6",
    "w": "7",
}


def _build_named_codes() -> Dict[str, StyleCode]:
    codes = {
        "~": StyleCode("~", RESET),
        "*": StyleCode("*", BOLD),
        "_": StyleCode("_", UNDERLINE),
        "i": StyleCode("i", ITALIC),
        # Bright black, the usual dark grey.
        "d": StyleCode("d", FOREGROUND, "90"),
        "D": StyleCode("D", BACKGROUND, "100"),
    }
    for letter, digit in _NAMED_COLORS.items():
        codes[letter] = StyleCode(letter, FOREGROUND, "3" + digit)
        upper = letter.upper()
        codes[upper] = StyleCode(upper, BACKGROUND, "4" + digit)
    return codes


NAMED_CODES: Dict[str, StyleCode] = _build_named_codes()


def indexed_foreground(index: int) -> StyleCode:
    return StyleCode(str(index), FOREGROUND, f"38;5;{index}")


def rgb_foreground(red: int, green: int, blue: int) -> StyleCode:
    return StyleCode(f"[{red},{green},{blue}]", FOREGROUND, f"38;2;{red};{green};{blue}")


def rgb_background(red: int, green: int, blue: int) -> StyleCode:
    return StyleCode(f"{{{red},{green},{blue}}}", BACKGROUND, f"48;2;{red};{green};{blue}")


@dataclass(frozen=True)
class StyleContext:
    """
    The complete set of styles active at one point of a rendering.

    reset records that a node explicitly asked to drop everything it
    inherited; it has no effect on serialization beyond making the
    context differ from the terminal default.
    """

    foreground: Optional[str] = None
    background: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    reset: bool = False

    def apply(self, codes: Iterable[StyleCode]) -> "StyleContext":
        """
        Return the context produced by applying codes on top of this one.

        A reset code clears every inherited category before any other
        code on the same node is applied. Later codes win over earlier
        codes of the same category.
        """

        codes = list(codes)
        context = self
        if any(code.category == RESET for code in codes):
            context = StyleContext(reset=True)

        for code in codes:
            if code.category == FOREGROUND:
                context = replace(context, foreground=code.sgr)
            elif code.category == BACKGROUND:
                context = replace(context, background=code.sgr)
            elif code.category == BOLD:
                context = replace(context, bold=True)
            elif code.category == ITALIC:
                context = replace(context, italic=True)
            elif code.category == UNDERLINE:
                context = replace(context, underline=True)

        return context

    def sgr_parameters(self) -> str:
        params = ["0"]
        if self.foreground is not None:
            params.append(self.foreground)
        if self.background is not None:
            params.append(self.background)
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.underline:
            params.append("4")
        return ";".join(params)


DEFAULT_CONTEXT = StyleContext()


class StyleEngine:
    """
    Turns style contexts into escape sequences.

    When disabled the engine emits nothing, which lets the same tree be
    rendered for terminals without colour support. bash_prompt wraps
    every sequence in readline's zero-width markers.
    """

    def __init__(self, enabled: bool = True, bash_prompt: bool = False) -> None:
        self.enabled = enabled
        self.bash_prompt = bash_prompt

    def resolve(self, context: StyleContext, codes: Iterable[StyleCode]) -> StyleContext:
        return context.apply(codes)

    def escape(self, context: StyleContext) -> str:
        if not self.enabled:
            return ""
        sequence = f"{ESC}[{context.sgr_parameters()}m"
        if self.bash_prompt:
            return f"{BASH_START}{sequence}{BASH_END}"
        return sequence

    def paint(self, text: str, codes: Iterable[StyleCode]) -> str:
        """
        Wrap text in the given codes on top of the terminal default.

        Used for glint's own diagnostics; empty text stays unstyled.
        """

        if not text:
            return text
        context = self.resolve(DEFAULT_CONTEXT, codes)
        return f"{self.escape(context)}{text}{self.escape(DEFAULT_CONTEXT)}"
