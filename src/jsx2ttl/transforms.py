"""Stock hooks for ``attribute_transform`` and ``extra_args_fn``.

Usable directly or by name, e.g. ``--attribute-transform
jsx2ttl.transforms:html_attributes``.
"""

import dataclasses
import re
from typing import List

from jsx2ttl.compiler.ast_nodes import (
    BooleanLiteral,
    Identifier,
    JSXAttribute,
    JSXExpressionContainer,
    JSXIdentifier,
    Node,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    StringLiteral,
    TemplateLiteral,
)
from jsx2ttl.compiler.exceptions import Jsx2TtlError
from jsx2ttl.compiler.scope import ClassScope, FunctionScope, ScopeMetadata


def rename_class_name(attribute: JSXAttribute) -> JSXAttribute:
    """``className`` -> ``class``. The value is left alone."""
    name = attribute.name
    if isinstance(name, JSXIdentifier) and name.name == "className":
        return dataclasses.replace(
            attribute, name=JSXIdentifier("class", loc=name.loc)
        )
    return attribute


def _kebab_case(name: str) -> str:
    return re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name).lower()


def _css_value(value: Node) -> str:
    if isinstance(value, BooleanLiteral):
        return "true" if value.value else "false"
    if isinstance(value, NumericLiteral):
        number = value.value
        if isinstance(number, float) and number.is_integer():
            number = int(number)
        return str(number)
    if isinstance(value, StringLiteral):
        return value.value
    if isinstance(value, Identifier):
        return value.name
    if isinstance(value, TemplateLiteral):
        if value.expressions:
            raise Jsx2TtlError(
                "style template literals cannot contain expressions", value
            )
        return "".join(quasi.raw for quasi in value.quasis)
    raise Jsx2TtlError(
        f"unsupported style value type: {type(value).__name__}", value
    )


def _css_key(key: Node) -> str:
    if isinstance(key, Identifier):
        return key.name
    if isinstance(key, StringLiteral):
        return key.value
    raise Jsx2TtlError("style object keys must be string or identifier", key)


def style_to_css(attribute: JSXAttribute) -> JSXAttribute:
    """Flatten ``style={{fontSize: 12}}`` into ``style="font-size: 12;"``.

    Only object literals are flattened; any other style value is kept as is.
    """
    name = attribute.name
    if not (isinstance(name, JSXIdentifier) and name.name == "style"):
        return attribute

    container = attribute.value
    if not isinstance(container, JSXExpressionContainer):
        return attribute
    expression = container.expression
    if not isinstance(expression, ObjectExpression):
        return attribute

    declarations: List[str] = []
    for prop in expression.properties:
        if not isinstance(prop, ObjectProperty):
            raise Jsx2TtlError("style object must have key value pairs", prop)
        key = _kebab_case(_css_key(prop.key))
        declarations.append(f"{key}: {_css_value(prop.value)};")

    return dataclasses.replace(
        attribute, value=StringLiteral(" ".join(declarations), loc=container.loc)
    )


def html_attributes(attribute: JSXAttribute) -> JSXAttribute:
    """React-style attributes to HTML: ``className`` and object ``style``."""
    return style_to_css(rename_class_name(attribute))


def component_flag_args(scope: ScopeMetadata) -> List[Node]:
    """Pass ``true`` as a third argument for templates built by components.

    Function components always get the flag; classes only when they implement
    ``Component``.
    """
    if isinstance(scope, ClassScope):
        if "Component" in scope.interfaces:
            return [BooleanLiteral(True)]
        return []
    if isinstance(scope, FunctionScope):
        return [BooleanLiteral(True)]
    return []
