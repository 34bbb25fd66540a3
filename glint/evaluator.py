"""
Tree-walking renderer for parsed glint formats.

The evaluator walks a tree once against a StatusSnapshot. The active
style context is passed down explicitly as an argument; every style
node computes a new context for its children and, when it produced
output, restores its parent's context afterwards.

Emptiness drives everything: a node that renders nothing reports
is_empty and its parent drops it together with the separator that would
have preceded it, its brackets and any escape codes around it.
"""

from __future__ import annotations

from typing import List, Optional

from .domain import FIELDS, MAX_COUNT, FieldSpec, RenderResult, StatusSnapshot
from .errors import ArithmeticOverflow
from .nodes import Field, FormatNode, Group, Literal, Sequence, Style
from .style import DEFAULT_CONTEXT, StyleContext, StyleEngine


class Evaluator:
    """
    Renders format trees for one status snapshot.
    """

    def __init__(self, snapshot: StatusSnapshot, styles: Optional[StyleEngine] = None) -> None:
        self.snapshot = snapshot
        self.styles = styles if styles is not None else StyleEngine()

    def render(self, node: FormatNode, context: StyleContext = DEFAULT_CONTEXT) -> RenderResult:
        if isinstance(node, Sequence):
            return self._render_sequence(node, context)
        if isinstance(node, Literal):
            return RenderResult(text=node.text, is_empty=len(node.text) == 0)
        if isinstance(node, Field):
            return self._render_field(node, context)
        if isinstance(node, Group):
            return self._render_group(node, context)
        if isinstance(node, Style):
            return self._render_style(node, context)
        raise TypeError(f"cannot render {type(node).__name__}")

    def _render_sequence(self, sequence: Sequence, context: StyleContext) -> RenderResult:
        """
        Join the non-empty elements of a sequence.

        A separator run is written only when something was already
        written and the element following it is non-empty, so no
        leading, trailing or doubled separators survive suppression.
        """

        parts: List[str] = []
        emitted = False
        for separator, element in sequence.items:
            result = self.render(element, context)
            if result.is_empty:
                continue
            if emitted:
                parts.append(separator)
            parts.append(result.text)
            emitted = True

        if not emitted:
            return RenderResult.empty()
        return RenderResult(text="".join(parts), is_empty=False)

    def _render_field(self, node: Field, context: StyleContext) -> RenderResult:
        spec = FIELDS[node.id]
        value = self._field_value(spec, node)
        if value is None:
            return RenderResult.empty()

        # Arguments replace the default prefix only when they render something.
        prefix = spec.prefix
        rendered = [self.render(arg, context) for arg in node.args]
        if any(not result.is_empty for result in rendered):
            prefix = "".join(result.text for result in rendered)
        return RenderResult(text=prefix + value, is_empty=False)

    def _field_value(self, spec: FieldSpec, node: Field) -> Optional[str]:
        """
        Return the rendered value of a field, or None when it is empty.
        """

        value = getattr(self.snapshot, spec.attribute)
        if spec.value_type == "text":
            return value or None

        if spec.requires_upstream and self.snapshot.upstream is None:
            return None
        if value == 0:
            return None
        if value < 0 or value > MAX_COUNT:
            raise ArithmeticOverflow(
                f"{spec.name} count {value} is outside the range 0-{MAX_COUNT}",
                offset=node.offset,
            )
        return str(value)

    def _render_group(self, node: Group, context: StyleContext) -> RenderResult:
        body = self._render_sequence(node.body, context)
        if body.is_empty:
            return RenderResult.empty()
        return RenderResult(text=node.kind.left + body.text + node.kind.right, is_empty=False)

    def _render_style(self, node: Style, context: StyleContext) -> RenderResult:
        inner = self.styles.resolve(context, node.codes)
        body = self._render_sequence(node.body, inner)
        if body.is_empty:
            return RenderResult.empty()
        text = self.styles.escape(inner) + body.text + self.styles.escape(context)
        return RenderResult(text=text, is_empty=False)
