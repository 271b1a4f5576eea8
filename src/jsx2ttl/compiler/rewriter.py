"""Post-order rewrite of a whole tree."""

import dataclasses
import logging
from typing import Any, Dict, List, Optional, cast

from jsx2ttl.compiler.ast_nodes import (
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportSpecifier,
    JSXElement,
    Node,
    Program,
    StringLiteral,
    iter_child_nodes,
    iter_fields,
)
from jsx2ttl.compiler.exceptions import Jsx2TtlError
from jsx2ttl.compiler.lowering import is_component, lower_element, tag_name
from jsx2ttl.compiler.options import TransformOptions
from jsx2ttl.compiler.scope import resolve_scope

logger = logging.getLogger(__name__)


class _Frame:
    """A node waiting for its rewritten children."""

    __slots__ = ("node", "children", "results")

    def __init__(self, node: Node) -> None:
        self.node = node
        self.children = list(iter_child_nodes(node))
        self.results: List[Node] = []

    def rebuild(self) -> Node:
        """Copy the node with its children swapped for their rewritten forms."""
        if not self.children:
            return self.node
        replaced = iter(self.results)
        changes: Dict[str, Any] = {}
        for name, value in iter_fields(self.node):
            if isinstance(value, Node):
                changes[name] = next(replaced)
            elif isinstance(value, list):
                changes[name] = [
                    next(replaced) if isinstance(item, Node) else item
                    for item in value
                ]
        return dataclasses.replace(self.node, **changes)


class ElementRewriter:
    """Replaces every JSXElement, deepest first, producing a new tree.

    The input tree is left untouched. Because children are rebuilt before
    their parent is lowered, an element never sees an unlowered descendant.
    """

    def __init__(
        self,
        options: TransformOptions,
        source: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        self.options = options
        self.source = source
        self.file_path = file_path
        self.components_lowered = 0
        self.templates_lowered = 0

    @property
    def elements_lowered(self) -> int:
        return self.components_lowered + self.templates_lowered

    def rewrite(self, node: Node) -> Node:
        return self._visit(node, [])

    def transform_program(self, program: Program) -> Program:
        """Rewrite a program and prepend the template import."""
        if not isinstance(program, Program):
            raise TypeError(f"Expected a Program, got {type(program).__name__}")
        rewritten = cast(Program, self.rewrite(program))
        logger.info(
            "Lowered %d element(s) in %s",
            self.elements_lowered,
            self.file_path or "<tree>",
        )
        return dataclasses.replace(
            rewritten, body=[build_import(self.options), *rewritten.body]
        )

    def _visit(self, root: Node, ancestors: List[Node]) -> Node:
        # Explicit stack: element nesting depth is bounded by input size only
        stack = [_Frame(root)]
        ancestors.append(root)
        while True:
            frame = stack[-1]
            if len(frame.results) < len(frame.children):
                child = frame.children[len(frame.results)]
                stack.append(_Frame(child))
                ancestors.append(child)
                continue

            stack.pop()
            ancestors.pop()
            new_node = frame.rebuild()
            if isinstance(new_node, JSXElement):
                new_node = self._lower(new_node, ancestors)
            if not stack:
                return new_node
            stack[-1].results.append(new_node)

    def _lower(self, element: JSXElement, ancestors: List[Node]) -> Node:
        try:
            scope = resolve_scope(ancestors)
            lowered = lower_element(element, scope, self.options)
        except Jsx2TtlError as e:
            span = e.node.loc if e.node is not None and e.node.loc else element.loc
            e.with_location(span, self.source, self.file_path)
            # The caller reports the raised error itself
            logger.debug(e.diagnostic())
            raise
        except Exception:
            # Hooks can raise anything; only the element location is known
            where = str(element.loc) if element.loc else "unknown location"
            text = element.loc.slice(self.source) if element.loc and self.source else ""
            logger.error("Error processing JSXElement at %s\n\t%s", where, text)
            raise

        if is_component(tag_name(element.name)):
            self.components_lowered += 1
        else:
            self.templates_lowered += 1
        logger.debug(
            "Lowered <%s> (%s) at %s",
            tag_name(element.name),
            scope.kind,
            element.loc or "?",
        )
        return lowered


def build_import(options: TransformOptions) -> ImportDeclaration:
    """``import X from 'path'`` or ``import { Name as X } from 'path'``."""
    local = Identifier(options.import_as)
    if options.is_default_import:
        specifier: Node = ImportDefaultSpecifier(local)
    else:
        specifier = ImportSpecifier(Identifier(options.import_name), local)
    return ImportDeclaration([specifier], StringLiteral(options.import_path))


def rewrite_tree(
    node: Node,
    options: TransformOptions,
    source: Optional[str] = None,
    file_path: Optional[str] = None,
) -> Node:
    """Lower every element under ``node`` without touching imports."""
    return ElementRewriter(options, source=source, file_path=file_path).rewrite(node)


def transform(
    program: Program,
    options: TransformOptions,
    source: Optional[str] = None,
    file_path: Optional[str] = None,
) -> Program:
    """Lower a whole program and prepend the template import.

    Raises a ``Jsx2TtlError`` (with location filled in) on the first element
    that cannot be lowered; nothing is returned in that case.
    """
    rewriter = ElementRewriter(options, source=source, file_path=file_path)
    return rewriter.transform_program(program)
