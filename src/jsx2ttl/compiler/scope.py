"""Classify the declaration enclosing an element."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from jsx2ttl.compiler.ast_nodes import (
    CLASS_TYPES,
    FUNCTION_TYPES,
    ArrayExpression,
    ArrowFunctionExpression,
    ClassProperty,
    Identifier,
    MemberExpression,
    Node,
    ObjectProperty,
    VariableDeclarator,
)

# Hitting the cap is treated the same as reaching the root
MAX_ANCESTOR_HOPS = 100


@dataclass(frozen=True)
class FunctionScope:
    name: Optional[str]
    is_arrow: bool = False
    kind: str = field(default="function", init=False)


@dataclass(frozen=True)
class ClassScope:
    name: Optional[str]
    super_classes: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    kind: str = field(default="class", init=False)


@dataclass(frozen=True)
class UnknownScope:
    kind: str = field(default="unknown", init=False)


ScopeMetadata = Union[FunctionScope, ClassScope, UnknownScope]


def resolve_scope(
    ancestors: Sequence[Node], max_hops: int = MAX_ANCESTOR_HOPS
) -> ScopeMetadata:
    """Return metadata for the innermost function or class around an element.

    ``ancestors`` runs from the root down to the element's parent. Class
    methods are not scopes of their own, so an element inside ``render()``
    resolves to the class.
    """
    hops = 0
    for index in range(len(ancestors) - 1, -1, -1):
        if hops >= max_hops:
            break
        hops += 1

        node = ancestors[index]
        if isinstance(node, FUNCTION_TYPES):
            return FunctionScope(name=_name_of(node.id), is_arrow=False)
        if isinstance(node, ArrowFunctionExpression):
            binding = ancestors[index - 1] if index > 0 else None
            return FunctionScope(name=_binding_name(binding), is_arrow=True)
        if isinstance(node, CLASS_TYPES):
            return ClassScope(
                name=_name_of(node.id),
                super_classes=_super_class_names(node.super_class),
                interfaces=[
                    name for name in map(_dotted_name, node.implements) if name
                ],
            )

    return UnknownScope()


def _name_of(identifier: Optional[Identifier]) -> Optional[str]:
    return identifier.name if identifier is not None else None


def _binding_name(binding: Optional[Node]) -> Optional[str]:
    """Name an arrow function takes from the node it is assigned through."""
    if isinstance(binding, VariableDeclarator):
        return _dotted_name(binding.id)
    if isinstance(binding, (ClassProperty, ObjectProperty)):
        return _dotted_name(binding.key)
    return None


def _super_class_names(super_class: Optional[Node]) -> List[str]:
    if super_class is None:
        return []
    if isinstance(super_class, ArrayExpression):
        names = [_dotted_name(e) for e in super_class.elements]
        return [name for name in names if name]
    name = _dotted_name(super_class)
    return [name] if name else []


def _dotted_name(node: Optional[Node]) -> Optional[str]:
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, MemberExpression):
        base = _dotted_name(node.object)
        if base is None:
            return None
        return f"{base}.{node.property.name}"
    return None
