"""Flatten element children into alternating statics and dynamics."""

from typing import List, Sequence

from jsx2ttl.compiler.ast_nodes import (
    LOWERED_TYPES,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXText,
    Node,
)
from jsx2ttl.compiler.exceptions import InternalOrderingError, UnexpectedChildKind


class ChildFlattener:
    """Accumulates fragments, remembering whether the last push was dynamic."""

    def __init__(self, statics: List[str], dynamics: List[Node]) -> None:
        self.statics = statics
        self.dynamics = dynamics
        self.last_was_dynamic = False

    def add_static(self, text: str) -> None:
        if self.last_was_dynamic:
            self.statics.append(text)
        else:
            self.statics[-1] += text
        self.last_was_dynamic = False

    def add_dynamic(self, node: Node) -> None:
        # Adjacent dynamics are separated by an empty static
        if self.last_was_dynamic:
            self.statics.append("")
        self.dynamics.append(node)
        self.last_was_dynamic = True

    def add_child(self, child: Node) -> None:
        if isinstance(child, JSXText):
            self.add_static(child.value)
        elif isinstance(child, JSXExpressionContainer):
            # {/* comment */} contributes nothing
            if isinstance(child.expression, JSXEmptyExpression):
                return
            self.add_dynamic(child.expression)
        elif isinstance(child, LOWERED_TYPES):
            self.add_dynamic(child)
        elif isinstance(child, JSXElement):
            raise InternalOrderingError(
                "Unexpected JSXElement child: descendants must be lowered first", child
            )
        else:
            raise UnexpectedChildKind(
                f"Unexpected child type: {type(child).__name__}", child
            )

    def add_children(self, children: Sequence[Node]) -> None:
        for child in children:
            self.add_child(child)
