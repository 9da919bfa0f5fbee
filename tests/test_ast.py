import dataclasses
import json

import pytest

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.monkey_parser import parse


def test_program_string() -> None:
    program = Program(
        (LetStatement(Identifier("myVar"), Identifier("anotherVar")),)
    )
    assert str(program) == "let myVar = anotherVar;"


def test_empty_program_string() -> None:
    assert str(Program()) == ""


@pytest.mark.parametrize(
    "node,expected",
    [
        (Identifier("x"), "x"),
        (IntegerLiteral(5), "5"),
        (BooleanLiteral(True), "true"),
        (BooleanLiteral(False), "false"),
        (PrefixExpression("-", IntegerLiteral(5)), "(-5)"),
        (InfixExpression(Identifier("a"), "*", Identifier("b")), "(a * b)"),
        (ReturnStatement(IntegerLiteral(1)), "return 1;"),
        (ReturnStatement(), "return;"),
        (ExpressionStatement(Identifier("a")), "a"),
        (
            IfExpression(
                Identifier("c"),
                BlockStatement((ExpressionStatement(Identifier("x")),)),
            ),
            "ifc x",
        ),
        (
            FunctionLiteral((), BlockStatement((ReturnStatement(),))),
            "fn() return;",
        ),
        (
            CallExpression(Identifier("f"), (IntegerLiteral(1), Identifier("y"))),
            "f(1, y)",
        ),
    ],
)
def test_node_strings(node: object, expected: str) -> None:
    assert str(node) == expected


def test_nodes_are_immutable() -> None:
    node = Identifier("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "y"  # type: ignore[misc]


def test_equality_ignores_position() -> None:
    assert Identifier("x", line=3, col=4) == Identifier("x")
    assert Identifier("x") != Identifier("y")
    assert IntegerLiteral(1) != Identifier("1")


def test_nodes_are_hashable() -> None:
    a = InfixExpression(Identifier("a"), "+", IntegerLiteral(1))
    b = InfixExpression(Identifier("a"), "+", IntegerLiteral(1), line=9)
    assert len({a, b}) == 1


def test_to_dict_basic() -> None:
    node = LetStatement(Identifier("x", line=1, col=5), IntegerLiteral(1), line=1, col=1)
    d = node.to_dict()
    assert d["kind"] == "LetStatement"
    assert d["line"] == 1
    assert d["col"] == 1
    assert d["name"] == {"kind": "Identifier", "name": "x", "line": 1, "col": 5}
    assert d["value"]["kind"] == "IntegerLiteral"
    assert d["value"]["value"] == 1


def test_to_dict_sequences_become_lists() -> None:
    node = CallExpression(Identifier("f"), (IntegerLiteral(1), IntegerLiteral(2)))
    d = node.to_dict()
    assert isinstance(d["arguments"], list)
    assert [a["value"] for a in d["arguments"]] == [1, 2]


def test_to_dict_optional_child() -> None:
    d = IfExpression(BooleanLiteral(True), BlockStatement()).to_dict()
    assert d["alternative"] is None
    assert d["consequence"] == {
        "kind": "BlockStatement",
        "statements": [],
        "line": 0,
        "col": 0,
    }


def test_parsed_program_to_dict_is_json() -> None:
    program, errors = parse("let add = fn(a, b) { return a + b; }; add(1, 2);")
    assert errors == []
    d = json.loads(json.dumps(program.to_dict()))
    assert d["kind"] == "Program"
    assert [s["kind"] for s in d["statements"]] == ["LetStatement", "ExpressionStatement"]
    fn = d["statements"][0]["value"]
    assert fn["kind"] == "FunctionLiteral"
    assert [p["name"] for p in fn["parameters"]] == ["a", "b"]
