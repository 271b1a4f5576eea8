"""JSON interchange for trees.

Nodes are dictionaries tagged with ``"type"`` (the node class name) and an
optional Babel-style ``"loc"``::

    {"type": "JSXText", "value": "hi",
     "loc": {"start": {"line": 1, "column": 5, "index": 5},
             "end": {"line": 1, "column": 7, "index": 7}}}

Field names are written in camelCase (``selfClosing``, ``superClass``), as
Babel does; snake_case names are accepted on load as well.
"""

import json
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jsx2ttl.compiler.ast_nodes import (
    Node,
    SourcePosition,
    SourceSpan,
    iter_child_nodes,
    iter_fields,
    node_types,
)
from jsx2ttl.compiler.exceptions import TreeFormatError


def snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _load_position(data: Any) -> SourcePosition:
    if not isinstance(data, dict) or "line" not in data or "column" not in data:
        raise TreeFormatError(f"Invalid source position: {data!r}")
    return SourcePosition(
        line=int(data["line"]), column=int(data["column"]), index=data.get("index")
    )


def _load_span(data: Any) -> Optional[SourceSpan]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise TreeFormatError(f"Invalid loc: {data!r}")
    return SourceSpan(
        start=_load_position(data.get("start")), end=_load_position(data.get("end"))
    )


class _PendingNode:
    """A decoded object whose child objects are still being built."""

    __slots__ = ("node_type", "cls", "kwargs", "children", "results")

    def __init__(self, data: Any, registry: Dict[str, type]) -> None:
        if not isinstance(data, dict):
            raise TreeFormatError(f"Expected a node object, got {data!r}")
        node_type = data.get("type")
        if node_type not in registry:
            raise TreeFormatError(f"Unknown node type: {node_type!r}")
        self.node_type = node_type
        self.cls = registry[node_type]
        self.kwargs: Dict[str, Any] = {}
        self.children: List[Dict[str, Any]] = []
        self.results: List[Node] = []

        allowed = {f.name for f in fields(self.cls)}
        for key, value in data.items():
            if key == "type":
                continue
            name = snake_case(key)
            if name == "loc":
                self.kwargs["loc"] = _load_span(value)
                continue
            if name not in allowed:
                raise TreeFormatError(f"Unknown field '{key}' for {node_type}")
            if isinstance(value, dict):
                self.children.append(value)
            elif isinstance(value, list):
                self.children.extend(item for item in value if isinstance(item, dict))
            self.kwargs[name] = value

    def build(self) -> Node:
        built = iter(self.results)
        kwargs = dict(self.kwargs)
        for name, value in self.kwargs.items():
            if name == "loc":
                continue
            if isinstance(value, dict):
                kwargs[name] = next(built)
            elif isinstance(value, list):
                kwargs[name] = [
                    next(built) if isinstance(item, dict) else item for item in value
                ]
        try:
            return self.cls(**kwargs)
        except TypeError as e:
            raise TreeFormatError(f"Invalid {self.node_type}: {e}")


def load_tree(data: Dict[str, Any]) -> Node:
    """Build nodes from a decoded JSON document."""
    if not isinstance(data, dict):
        raise TreeFormatError("Tree root must be a JSON object")
    registry = node_types()
    stack = [_PendingNode(data, registry)]
    while True:
        pending = stack[-1]
        if len(pending.results) < len(pending.children):
            stack.append(
                _PendingNode(pending.children[len(pending.results)], registry)
            )
            continue
        stack.pop()
        node = pending.build()
        if not stack:
            return node
        stack[-1].results.append(node)


def load_file(path: Path) -> Node:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TreeFormatError(f"{path}: invalid JSON: {e}")
        except RecursionError:
            raise TreeFormatError(f"{path}: JSON nested too deeply to decode")
    return load_tree(data)


def _dump_position(pos: SourcePosition) -> Dict[str, Any]:
    out: Dict[str, Any] = {"line": pos.line, "column": pos.column}
    if pos.index is not None:
        out["index"] = pos.index
    return out


def _dump_fields(node: Node, dumped: List[Dict[str, Any]]) -> Dict[str, Any]:
    replaced = iter(dumped)
    out: Dict[str, Any] = {"type": node.type}
    for name, value in iter_fields(node):
        if isinstance(value, Node):
            value = next(replaced)
        elif isinstance(value, list):
            value = [next(replaced) if isinstance(item, Node) else item for item in value]
        out[camel_case(name)] = value
    if node.loc is not None:
        out["loc"] = {
            "start": _dump_position(node.loc.start),
            "end": _dump_position(node.loc.end),
        }
    return out


def dump_tree(node: Node) -> Dict[str, Any]:
    """Turn a node into JSON-ready dictionaries with camelCase keys."""
    # (node, its children, their dumped forms)
    stack: List[Tuple[Node, List[Node], List[Dict[str, Any]]]] = [
        (node, list(iter_child_nodes(node)), [])
    ]
    while True:
        current, children, dumped = stack[-1]
        if len(dumped) < len(children):
            child = children[len(dumped)]
            stack.append((child, list(iter_child_nodes(child)), []))
            continue
        stack.pop()
        out = _dump_fields(current, dumped)
        if not stack:
            return out
        stack[-1][2].append(out)


def dumps(node: Node, indent: Optional[int] = 2) -> str:
    try:
        return json.dumps(dump_tree(node), indent=indent)
    except RecursionError:
        raise TreeFormatError("Tree nested too deeply to encode as JSON")
