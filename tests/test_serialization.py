import json
import unittest

from jsx2ttl.compiler.ast_nodes import (
    ClassDeclaration,
    Identifier,
    JSXElement,
    JSXIdentifier,
    JSXText,
    Program,
)
from jsx2ttl.compiler.exceptions import TreeFormatError
from jsx2ttl.compiler.rewriter import transform
from jsx2ttl.compiler.serialization import dump_tree, dumps, load_file, load_tree

from tree_builders import options

HELLO = {
    "type": "Program",
    "body": [
        {
            "type": "FunctionDeclaration",
            "id": {"type": "Identifier", "name": "Hello"},
            "params": [],
            "body": [
                {
                    "type": "ReturnStatement",
                    "argument": {
                        "type": "JSXElement",
                        "name": {"type": "JSXIdentifier", "name": "div"},
                        "attributes": [],
                        "children": [{"type": "JSXText", "value": "hi"}],
                        "selfClosing": False,
                        "loc": {
                            "start": {"line": 2, "column": 9, "index": 30},
                            "end": {"line": 2, "column": 23, "index": 44},
                        },
                    },
                }
            ],
        }
    ],
}


class TestSerialization(unittest.TestCase):
    def test_load(self) -> None:
        tree = load_tree(HELLO)
        self.assertIsInstance(tree, Program)
        element = tree.body[0].body[0].argument  # type: ignore[attr-defined]
        self.assertIsInstance(element, JSXElement)
        self.assertEqual(element.name, JSXIdentifier("div"))
        self.assertEqual(element.children, [JSXText("hi")])
        self.assertFalse(element.self_closing)
        self.assertEqual(element.loc.start.line, 2)
        self.assertEqual(element.loc.end.index, 44)

    def test_camel_case_fields(self) -> None:
        tree = load_tree(
            {
                "type": "ClassDeclaration",
                "id": {"type": "Identifier", "name": "C"},
                "superClass": {"type": "Identifier", "name": "Base"},
            }
        )
        self.assertEqual(tree, ClassDeclaration(Identifier("C"), super_class=Identifier("Base")))

    def test_dump_keeps_spans(self) -> None:
        dumped = dump_tree(load_tree(HELLO))
        element = dumped["body"][0]["body"][0]["argument"]
        self.assertEqual(element["type"], "JSXElement")
        self.assertEqual(element["selfClosing"], False)
        self.assertNotIn("self_closing", element)
        self.assertEqual(element["loc"]["start"], {"line": 2, "column": 9, "index": 30})
        self.assertNotIn("loc", dumped)

    def test_dump_writes_camel_case_keys(self) -> None:
        tree = ClassDeclaration(Identifier("C"), super_class=Identifier("Base"))
        dumped = dump_tree(tree)
        self.assertEqual(dumped["superClass"], {"type": "Identifier", "name": "Base"})
        self.assertNotIn("super_class", dumped)
        self.assertEqual(load_tree(dumped), tree)

    def test_deeply_nested_tree(self) -> None:
        depth = 600
        data: dict = {"type": "JSXText", "value": "x"}
        for _ in range(depth):
            data = {
                "type": "JSXElement",
                "name": {"type": "JSXIdentifier", "name": "div"},
                "children": [data],
            }

        tree = load_tree(data)
        dumped = dump_tree(tree)

        levels = 0
        node = tree
        current = dumped
        while isinstance(node, JSXElement):
            self.assertEqual(current["type"], "JSXElement")
            node = node.children[0]
            current = current["children"][0]
            levels += 1
        self.assertEqual(levels, depth)
        self.assertEqual(node, JSXText("x"))
        self.assertEqual(current, {"type": "JSXText", "value": "x"})

    def test_lowered_tree_dumps(self) -> None:
        out = transform(load_tree(HELLO), options())  # type: ignore[arg-type]
        data = json.loads(dumps(out))
        self.assertEqual(data["body"][0]["type"], "ImportDeclaration")
        new = data["body"][1]["body"][0]["argument"]
        self.assertEqual(new["type"], "NewExpression")
        self.assertEqual(new["callee"], {"type": "Identifier", "name": "Template"})
        self.assertEqual(
            new["arguments"][0]["elements"],
            [{"type": "StringLiteral", "value": "<div>hi</div>"}],
        )
        self.assertEqual(new["loc"]["end"]["column"], 23)

    def test_unknown_type(self) -> None:
        with self.assertRaises(TreeFormatError):
            load_tree({"type": "JSXFragment"})

    def test_unknown_field(self) -> None:
        with self.assertRaises(TreeFormatError):
            load_tree({"type": "Identifier", "name": "x", "typeAnnotation": None})

    def test_missing_field(self) -> None:
        with self.assertRaises(TreeFormatError):
            load_tree({"type": "Identifier"})

    def test_bad_loc(self) -> None:
        with self.assertRaises(TreeFormatError):
            load_tree({"type": "Identifier", "name": "x", "loc": {"start": {}, "end": {}}})

    def test_load_file(self) -> None:
        import tempfile
        from pathlib import Path

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tree.json"
            path.write_text(json.dumps(HELLO))
            self.assertIsInstance(load_file(path), Program)

            broken = Path(tmp) / "broken.json"
            broken.write_text("{")
            with self.assertRaises(TreeFormatError):
                load_file(broken)


if __name__ == "__main__":
    unittest.main()
