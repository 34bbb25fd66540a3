"""
glint renders a short, styled summary of a git working tree for shell
prompts.

A format string such as ``\\b\\<\\+\\->\\[\\M\\A\\R\\D]`` is parsed into a
tree once and rendered against a StatusSnapshot; empty fields suppress
the brackets and separators around them.
"""

from .domain import StatusSnapshot
from .parser import parse
from .prompt import render_format

__all__ = ["StatusSnapshot", "parse", "render_format"]
