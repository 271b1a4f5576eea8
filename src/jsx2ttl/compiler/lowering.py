"""Lower a single JSX element into a template construction or component call."""

from dataclasses import dataclass, field
from typing import List

from jsx2ttl.compiler.ast_nodes import (
    ArrayExpression,
    CallExpression,
    Identifier,
    JSXElement,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    MemberExpression,
    NewExpression,
    Node,
    StringLiteral,
)
from jsx2ttl.compiler.attributes import compile_props, compile_tag_attributes
from jsx2ttl.compiler.children import ChildFlattener
from jsx2ttl.compiler.exceptions import (
    MalformedTagName,
    TemplateInvariantViolation,
    UnresolvedComponentContext,
)
from jsx2ttl.compiler.options import TransformOptions
from jsx2ttl.compiler.scope import ClassScope, FunctionScope, ScopeMetadata

RENDER_METHOD = "render"


@dataclass
class LoweredForm:
    """Arguments of a template construction: statics, dynamics, extras."""

    statics: List[str] = field(default_factory=list)
    dynamics: List[Node] = field(default_factory=list)
    extra_args: List[Node] = field(default_factory=list)

    def check_invariant(self, element: JSXElement) -> None:
        if len(self.statics) != len(self.dynamics) + 1:
            raise TemplateInvariantViolation(
                "Statics should have one more item than dynamics: "
                f"statics={self.statics!r}, dynamics.length={len(self.dynamics)}",
                element,
            )

    def arguments(self) -> List[Node]:
        return [
            ArrayExpression([StringLiteral(s) for s in self.statics]),
            ArrayExpression(list(self.dynamics)),
            *self.extra_args,
        ]


def tag_name(name: Node) -> str:
    """Render a tag name node as text: ``div``, ``Foo.Bar``, ``svg:rect``."""
    if isinstance(name, JSXIdentifier):
        if not name.name:
            raise MalformedTagName("Empty tag name", name)
        return name.name
    if isinstance(name, JSXMemberExpression):
        return f"{tag_name(name.object)}.{tag_name(name.property)}"
    if isinstance(name, JSXNamespacedName):
        return f"{tag_name(name.namespace)}:{tag_name(name.name)}"
    raise MalformedTagName(f"Unknown element name type: {type(name).__name__}", name)


def is_component(name: str) -> bool:
    """Components are tags whose first character is unchanged by upper-casing."""
    return name[0] == name[0].upper()


def _component_callee(name: Node) -> Node:
    if isinstance(name, JSXMemberExpression):
        return MemberExpression(
            _component_callee(name.object),
            Identifier(name.property.name, loc=name.property.loc),
            loc=name.loc,
        )
    return Identifier(tag_name(name), loc=name.loc)


def lower_component(element: JSXElement, scope: ScopeMetadata) -> Node:
    """``Tag(props)`` inside functions, ``new Tag(props).render()`` inside classes."""
    props = compile_props(element.attributes)
    callee = _component_callee(element.name)

    if isinstance(scope, FunctionScope):
        return CallExpression(callee, [props], loc=element.loc)
    if isinstance(scope, ClassScope):
        instance = NewExpression(callee, [props])
        return CallExpression(
            MemberExpression(instance, Identifier(RENDER_METHOD)), [], loc=element.loc
        )
    raise UnresolvedComponentContext(
        f"Component <{tag_name(element.name)}> is not inside a function or class",
        element,
    )


def compile_template(
    element: JSXElement, scope: ScopeMetadata, options: TransformOptions
) -> LoweredForm:
    """Build statics, dynamics and extra arguments for a plain element."""
    name = tag_name(element.name)
    form = LoweredForm(statics=[f"<{name}"])

    compile_tag_attributes(
        element.attributes, form.statics, form.dynamics, options.attribute_transform
    )

    if not element.children and not element.has_closing_tag:
        form.statics[-1] += " />"
    else:
        form.statics[-1] += ">"

    flattener = ChildFlattener(form.statics, form.dynamics)
    flattener.add_children(element.children)

    if element.has_closing_tag:
        flattener.add_static(f"</{name}>")

    form.check_invariant(element)
    form.extra_args = list(options.extra_args_fn(scope))
    return form


def emit_template(
    form: LoweredForm, options: TransformOptions, element: JSXElement
) -> Node:
    callee = Identifier(options.import_as)
    if options.use_constructor_call:
        return NewExpression(callee, form.arguments(), loc=element.loc)
    return CallExpression(callee, form.arguments(), loc=element.loc)


def lower_element(
    element: JSXElement, scope: ScopeMetadata, options: TransformOptions
) -> Node:
    """Replace one element whose descendants are already lowered."""
    name = tag_name(element.name)
    if is_component(name):
        return lower_component(element, scope)
    form = compile_template(element, scope, options)
    return emit_template(form, options, element)
