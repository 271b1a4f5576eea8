import unittest

from jsx2ttl.compiler.ast_nodes import (
    ArrayExpression,
    ArrowFunctionExpression,
    ClassDeclaration,
    ClassExpression,
    ClassMethod,
    ClassProperty,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    MemberExpression,
    Program,
    ReturnStatement,
    VariableDeclarator,
)
from jsx2ttl.compiler.scope import (
    ClassScope,
    FunctionScope,
    UnknownScope,
    resolve_scope,
)


class TestResolveScope(unittest.TestCase):
    def test_function_declaration(self) -> None:
        func = FunctionDeclaration(Identifier("App"))
        scope = resolve_scope([Program(), func, ReturnStatement()])
        self.assertEqual(scope, FunctionScope(name="App", is_arrow=False))

    def test_anonymous_function_expression(self) -> None:
        scope = resolve_scope([Program(), FunctionExpression()])
        self.assertEqual(scope, FunctionScope(name=None, is_arrow=False))

    def test_arrow_takes_name_from_declarator(self) -> None:
        arrow = ArrowFunctionExpression()
        declarator = VariableDeclarator(Identifier("Card"), arrow)
        scope = resolve_scope([Program(), declarator, arrow])
        self.assertEqual(scope, FunctionScope(name="Card", is_arrow=True))

    def test_arrow_class_property_binding(self) -> None:
        arrow = ArrowFunctionExpression()
        prop = ClassProperty(Identifier("renderRow"), arrow)
        scope = resolve_scope([Program(), ClassDeclaration(Identifier("T")), prop, arrow])
        self.assertEqual(scope, FunctionScope(name="renderRow", is_arrow=True))

    def test_unbound_arrow(self) -> None:
        scope = resolve_scope([Program(), ReturnStatement(), ArrowFunctionExpression()])
        self.assertEqual(scope, FunctionScope(name=None, is_arrow=True))

    def test_class_with_extends_and_implements(self) -> None:
        cls = ClassDeclaration(
            Identifier("C"),
            super_class=Identifier("Base"),
            implements=[Identifier("I1"), Identifier("I2")],
        )
        method = ClassMethod(Identifier("render"))
        scope = resolve_scope([Program(), cls, method, ReturnStatement()])
        self.assertEqual(
            scope,
            ClassScope(name="C", super_classes=["Base"], interfaces=["I1", "I2"]),
        )

    def test_multi_extends_list(self) -> None:
        cls = ClassExpression(
            Identifier("M"),
            super_class=ArrayExpression([Identifier("A"), Identifier("B")]),
        )
        scope = resolve_scope([cls])
        assert isinstance(scope, ClassScope)
        self.assertEqual(scope.super_classes, ["A", "B"])

    def test_member_super_class(self) -> None:
        cls = ClassDeclaration(
            Identifier("Hello"),
            super_class=MemberExpression(Identifier("React"), Identifier("Component")),
        )
        scope = resolve_scope([cls])
        assert isinstance(scope, ClassScope)
        self.assertEqual(scope.super_classes, ["React.Component"])

    def test_innermost_match_wins(self) -> None:
        cls = ClassDeclaration(Identifier("Outer"))
        arrow = ArrowFunctionExpression()
        declarator = VariableDeclarator(Identifier("row"), arrow)
        scope = resolve_scope([Program(), cls, ClassMethod(Identifier("render")), declarator, arrow])
        self.assertEqual(scope, FunctionScope(name="row", is_arrow=True))

    def test_root_is_unknown(self) -> None:
        self.assertEqual(resolve_scope([Program(), ReturnStatement()]), UnknownScope())
        self.assertEqual(resolve_scope([]), UnknownScope())

    def test_hop_cap_means_no_match(self) -> None:
        chain = [FunctionDeclaration(Identifier("far"))] + [ReturnStatement()] * 5
        self.assertEqual(resolve_scope(chain, max_hops=5), UnknownScope())
        self.assertEqual(resolve_scope(chain, max_hops=6), FunctionScope("far"))

    def test_kind_tags(self) -> None:
        self.assertEqual(FunctionScope("f").kind, "function")
        self.assertEqual(ClassScope("c").kind, "class")
        self.assertEqual(UnknownScope().kind, "unknown")


if __name__ == "__main__":
    unittest.main()
