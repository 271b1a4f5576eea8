"""Tree nodes consumed and produced by the jsx2ttl pass.

The external parser hands the pass a tree made of these nodes; the pass hands
back the same kind of tree with every ``JSXElement`` replaced by a call or
construction node. Expression nodes other than the JSX ones are opaque to the
lowering core: they are carried through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class SourcePosition:
    line: int
    column: int
    index: Optional[int] = None


@dataclass(frozen=True)
class SourceSpan:
    """Start/end positions of a node in the original source (1-based lines)."""

    start: SourcePosition
    end: SourcePosition

    def slice(self, source: str) -> str:
        """Return the text covered by this span, if offsets are known."""
        if self.start.index is None or self.end.index is None:
            return ""
        return source[self.start.index : self.end.index]

    def __str__(self) -> str:
        return (
            f"{self.start.line}:{self.start.column}-"
            f"{self.end.line}:{self.end.column}"
        )


@dataclass
class Node:
    """Base class for every tree node."""

    loc: Optional[SourceSpan] = field(
        default=None, kw_only=True, compare=False, repr=False
    )

    @property
    def type(self) -> str:
        return type(self).__name__


def iter_fields(node: Node) -> Iterator[Tuple[str, Any]]:
    """Yield ``(name, value)`` for every field of ``node`` except ``loc``."""
    for f in fields(node):
        if f.name == "loc":
            continue
        yield f.name, getattr(node, f.name)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield direct child nodes, including those held in list fields."""
    for _, value in iter_fields(node):
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


# === Program / module level ===


@dataclass
class Program(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class Identifier(Node):
    name: str


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class ImportSpecifier(Node):
    imported: Identifier
    local: Identifier


@dataclass
class ImportDefaultSpecifier(Node):
    local: Identifier


@dataclass
class ImportDeclaration(Node):
    specifiers: List[Node]
    source: StringLiteral


@dataclass
class ExportNamedDeclaration(Node):
    declaration: Optional[Node] = None


@dataclass
class ExportDefaultDeclaration(Node):
    declaration: Node


# === Declarations and statements ===


@dataclass
class FunctionDeclaration(Node):
    id: Optional[Identifier] = None
    params: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class FunctionExpression(Node):
    id: Optional[Identifier] = None
    params: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class ArrowFunctionExpression(Node):
    params: List[Node] = field(default_factory=list)
    # A statement list, or a single expression for concise bodies
    body: Union[List[Node], Node] = field(default_factory=list)


@dataclass
class ClassMethod(Node):
    """A method inside a class body. Not a function scope of its own."""

    key: Identifier
    params: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)
    kind: str = "method"


@dataclass
class ClassProperty(Node):
    key: Identifier
    value: Optional[Node] = None


@dataclass
class ClassDeclaration(Node):
    id: Optional[Identifier] = None
    super_class: Optional[Node] = None
    implements: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class ClassExpression(Node):
    id: Optional[Identifier] = None
    super_class: Optional[Node] = None
    implements: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class VariableDeclarator(Node):
    id: Node
    init: Optional[Node] = None


@dataclass
class VariableDeclaration(Node):
    kind: str = "const"
    declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass
class ReturnStatement(Node):
    argument: Optional[Node] = None


@dataclass
class ExpressionStatement(Node):
    expression: Node


# === Expressions ===


@dataclass
class RawExpression(Node):
    """An embedded expression kept as source text."""

    code: str


@dataclass
class NumericLiteral(Node):
    value: Union[int, float]


@dataclass
class BooleanLiteral(Node):
    value: bool


@dataclass
class NullLiteral(Node):
    pass


@dataclass
class ArrayExpression(Node):
    elements: List[Node] = field(default_factory=list)


@dataclass
class ObjectProperty(Node):
    key: Node
    value: Node


@dataclass
class ObjectExpression(Node):
    properties: List[Node] = field(default_factory=list)


@dataclass
class SpreadElement(Node):
    argument: Node


@dataclass
class MemberExpression(Node):
    object: Node
    property: Identifier


@dataclass
class CallExpression(Node):
    callee: Node
    arguments: List[Node] = field(default_factory=list)


@dataclass
class NewExpression(Node):
    callee: Node
    arguments: List[Node] = field(default_factory=list)


@dataclass
class TemplateElement(Node):
    raw: str
    cooked: Optional[str] = None
    tail: bool = False


@dataclass
class TemplateLiteral(Node):
    """A backtick string; ``quasis`` has one more entry than ``expressions``."""

    quasis: List[TemplateElement] = field(default_factory=list)
    expressions: List[Node] = field(default_factory=list)


# === JSX ===


@dataclass
class JSXIdentifier(Node):
    name: str


@dataclass
class JSXMemberExpression(Node):
    object: Union["JSXMemberExpression", JSXIdentifier]
    property: JSXIdentifier


@dataclass
class JSXNamespacedName(Node):
    namespace: JSXIdentifier
    name: JSXIdentifier


@dataclass
class JSXEmptyExpression(Node):
    pass


@dataclass
class JSXExpressionContainer(Node):
    expression: Node


@dataclass
class JSXAttribute(Node):
    name: Union[JSXIdentifier, JSXNamespacedName]
    value: Optional[Node] = None


@dataclass
class JSXSpreadAttribute(Node):
    argument: Node


@dataclass
class JSXText(Node):
    value: str


@dataclass
class JSXElement(Node):
    name: Node
    attributes: List[Node] = field(default_factory=list)
    children: List[Node] = field(default_factory=list)
    self_closing: bool = False

    @property
    def has_closing_tag(self) -> bool:
        return not self.self_closing


# Nodes this pass produces in place of an element
LOWERED_TYPES = (CallExpression, NewExpression)

FUNCTION_TYPES = (FunctionDeclaration, FunctionExpression)
CLASS_TYPES = (ClassDeclaration, ClassExpression)


def _all_node_types() -> List[type]:
    found: List[type] = []
    stack = [Node]
    while stack:
        cls = stack.pop()
        for sub in cls.__subclasses__():
            found.append(sub)
            stack.append(sub)
    return found


def node_types() -> dict:
    """Map node type names to classes, for the JSON interchange layer."""
    return {cls.__name__: cls for cls in _all_node_types()}
