"""Attribute compilation for component props and plain tag fragments."""

from typing import Callable, List, Sequence, Union

from jsx2ttl.compiler.ast_nodes import (
    LOWERED_TYPES,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXIdentifier,
    JSXNamespacedName,
    JSXSpreadAttribute,
    Node,
    NullLiteral,
    ObjectExpression,
    ObjectProperty,
    SpreadElement,
    StringLiteral,
)
from jsx2ttl.compiler.exceptions import (
    InternalOrderingError,
    MalformedTagName,
    UnhandledAttributeValueKind,
    UnsupportedAttributeValueKind,
)


def attribute_name(name: Union[JSXIdentifier, JSXNamespacedName]) -> str:
    """Render an attribute name as it appears in markup (``ns:local``)."""
    if isinstance(name, JSXIdentifier):
        return name.name
    if isinstance(name, JSXNamespacedName):
        return f"{name.namespace.name}:{name.name.name}"
    raise MalformedTagName(f"Unknown attribute name type: {type(name).__name__}", name)


def _property_key(name: Union[JSXIdentifier, JSXNamespacedName]) -> Identifier:
    # Namespaced attributes are keyed by their local name
    if isinstance(name, JSXNamespacedName):
        return Identifier(name.name.name, loc=name.loc)
    if isinstance(name, JSXIdentifier):
        return Identifier(name.name, loc=name.loc)
    raise MalformedTagName(f"Unknown attribute name type: {type(name).__name__}", name)


def compile_props(attributes: Sequence[Node]) -> ObjectExpression:
    """Turn a component's attributes into a properties map."""
    properties: List[Node] = []
    for attr in attributes:
        if isinstance(attr, JSXSpreadAttribute):
            properties.append(SpreadElement(attr.argument, loc=attr.loc))
            continue
        if not isinstance(attr, JSXAttribute):
            raise UnsupportedAttributeValueKind(
                f"Unsupported JSX attribute type: {type(attr).__name__}", attr
            )

        key = _property_key(attr.name)
        value = attr.value
        if value is None:
            properties.append(ObjectProperty(key, NullLiteral(), loc=attr.loc))
            continue

        if isinstance(value, StringLiteral):
            prop_value: Node = StringLiteral(value.value, loc=value.loc)
        elif isinstance(value, JSXExpressionContainer):
            if isinstance(value.expression, JSXEmptyExpression):
                prop_value = NullLiteral(loc=value.loc)
            else:
                prop_value = value.expression
        elif isinstance(value, LOWERED_TYPES):
            prop_value = value
        elif isinstance(value, JSXElement):
            raise InternalOrderingError(
                "Attribute value element was not lowered before its owner", attr
            )
        else:
            raise UnsupportedAttributeValueKind(
                f"Unsupported JSX attribute value type: {type(value).__name__}", attr
            )
        properties.append(ObjectProperty(key, prop_value, loc=attr.loc))

    return ObjectExpression(properties)


def compile_tag_attributes(
    attributes: Sequence[Node],
    statics: List[str],
    dynamics: List[Node],
    transform: Callable[[JSXAttribute], JSXAttribute],
) -> None:
    """Append a plain element's attributes to the open tag fragment.

    ``statics`` must already hold the ``<tag`` fragment. Every attribute with a
    dynamic value opens a slot and leaves a fresh static holding the closing
    quote, so the statics/dynamics alternation is kept.
    """
    for attr in attributes:
        if isinstance(attr, JSXSpreadAttribute):
            statics[-1] += " "
            dynamics.append(attr.argument)
            # Reopen a static so the tag can still be closed after the spread
            statics.append("")
            continue
        if not isinstance(attr, JSXAttribute):
            raise UnhandledAttributeValueKind(
                f"Unhandled JSX attribute type: {type(attr).__name__}", attr
            )

        new_attr = transform(attr)
        name = attribute_name(new_attr.name)
        value = new_attr.value

        if value is None:
            continue
        if isinstance(value, StringLiteral):
            statics[-1] += f' {name}="{value.value}"'
        elif isinstance(value, (JSXExpressionContainer,) + LOWERED_TYPES):
            expression = (
                value.expression if isinstance(value, JSXExpressionContainer) else value
            )
            if isinstance(expression, JSXEmptyExpression):
                expression = NullLiteral(loc=value.loc)
            statics[-1] += f' {name}="'
            dynamics.append(expression)
            statics.append('"')
        elif isinstance(value, JSXElement):
            raise InternalOrderingError(
                "Attribute value element was not lowered before its owner", attr
            )
        else:
            raise UnhandledAttributeValueKind(
                f"Unhandled JSX attribute value type: {type(value).__name__}", attr
            )
