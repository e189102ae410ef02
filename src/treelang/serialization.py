"""
JSON encoding of the treelang AST.

Each node is a JSON object tagged by `kind`. This is the exchange format for
parsers living outside this package:

    [{"kind": "let", "name": "x",
      "expression": {"kind": "number", "value": 1}},
     {"kind": "print", "expression": {"kind": "variable", "name": "x"}}]

Node shapes are trusted; only the `kind` tags and operator spellings are
checked. Non-finite numbers are written as the strings "Infinity",
"-Infinity" and "NaN", since JSON has no literal for them.
"""

import json
import math
from typing import Any, Dict, List

from .ast import (
    BinaryOperator,
    Expression, NumberLiteral, BooleanLiteral, Variable, BinaryOp,
    FunctionLiteral, Call,
    Statement, Let, Assignment, If, While, Print, ExpressionStatement, Return,
    Program,
)
from .errors import UnknownExpression, UnknownStatement

_NON_FINITE = {
    "Infinity": math.inf,
    "-Infinity": -math.inf,
    "NaN": math.nan,
}

_OPERATORS = {op.value: op for op in BinaryOperator}


def _number_from_json(value: Any) -> float:
    if isinstance(value, str):
        return _NON_FINITE[value]
    return float(value)


def _number_to_json(value: float) -> Any:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 2 ** 53:
        return int(value)
    return value


# =============================================================================
# Decoding
# =============================================================================

def expression_from_dict(data: Dict[str, Any]) -> Expression:
    """Build an Expression node from its JSON object."""
    kind = data.get("kind") if isinstance(data, dict) else type(data).__name__

    if kind == "number":
        return NumberLiteral(_number_from_json(data["value"]))
    elif kind == "boolean":
        return BooleanLiteral(bool(data["value"]))
    elif kind == "variable":
        return Variable(data["name"])
    elif kind == "operator":
        operator = _OPERATORS.get(data.get("operator"))
        if operator is None:
            raise UnknownExpression(f"operator {data.get('operator')}")
        return BinaryOp(
            operator,
            expression_from_dict(data["left"]),
            expression_from_dict(data["right"]),
        )
    elif kind == "function":
        return FunctionLiteral(
            list(data.get("parameters", [])),
            statements_from_list(data.get("body", [])),
        )
    elif kind == "call":
        return Call(
            data["callee"],
            [expression_from_dict(arg) for arg in data.get("arguments", [])],
        )
    else:
        raise UnknownExpression(kind)


def statement_from_dict(data: Dict[str, Any]) -> Statement:
    """Build a Statement node from its JSON object."""
    kind = data.get("kind") if isinstance(data, dict) else type(data).__name__

    if kind == "let":
        return Let(data["name"], expression_from_dict(data["expression"]))
    elif kind == "assignment":
        return Assignment(data["name"], expression_from_dict(data["expression"]))
    elif kind == "if":
        return If(
            expression_from_dict(data["test"]),
            statements_from_list(data.get("truePart", [])),
            statements_from_list(data.get("falsePart", [])),
        )
    elif kind == "while":
        return While(
            expression_from_dict(data["test"]),
            statements_from_list(data.get("body", [])),
        )
    elif kind == "print":
        return Print(expression_from_dict(data["expression"]))
    elif kind == "expression":
        return ExpressionStatement(expression_from_dict(data["expression"]))
    elif kind == "return":
        return Return(expression_from_dict(data["expression"]))
    else:
        raise UnknownStatement(kind)


def statements_from_list(data: List[Dict[str, Any]]) -> List[Statement]:
    return [statement_from_dict(item) for item in data]


def program_from_json(text: str) -> Program:
    """
    Decode a program from JSON text.

    Raises:
        ValueError: if the text is not JSON or not a list of statements
        UnknownExpression, UnknownStatement: on unrecognized `kind` tags
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("AST JSON must be a list of statements")
    return statements_from_list(data)


# =============================================================================
# Encoding
# =============================================================================

def expression_to_dict(expr: Expression) -> Dict[str, Any]:
    """Convert an Expression node to its JSON object."""
    if isinstance(expr, NumberLiteral):
        return {"kind": "number", "value": _number_to_json(expr.value)}
    elif isinstance(expr, BooleanLiteral):
        return {"kind": "boolean", "value": expr.value}
    elif isinstance(expr, Variable):
        return {"kind": "variable", "name": expr.name}
    elif isinstance(expr, BinaryOp):
        return {
            "kind": "operator",
            "operator": expr.operator.value,
            "left": expression_to_dict(expr.left),
            "right": expression_to_dict(expr.right),
        }
    elif isinstance(expr, FunctionLiteral):
        return {
            "kind": "function",
            "parameters": list(expr.parameters),
            "body": program_to_dict(expr.body),
        }
    elif isinstance(expr, Call):
        return {
            "kind": "call",
            "callee": expr.callee,
            "arguments": [expression_to_dict(arg) for arg in expr.arguments],
        }
    else:
        raise UnknownExpression(type(expr).__name__)


def statement_to_dict(stmt: Statement) -> Dict[str, Any]:
    """Convert a Statement node to its JSON object."""
    if isinstance(stmt, Let):
        return {"kind": "let", "name": stmt.name,
                "expression": expression_to_dict(stmt.expression)}
    elif isinstance(stmt, Assignment):
        return {"kind": "assignment", "name": stmt.name,
                "expression": expression_to_dict(stmt.expression)}
    elif isinstance(stmt, If):
        return {
            "kind": "if",
            "test": expression_to_dict(stmt.test),
            "truePart": program_to_dict(stmt.true_part),
            "falsePart": program_to_dict(stmt.false_part),
        }
    elif isinstance(stmt, While):
        return {
            "kind": "while",
            "test": expression_to_dict(stmt.test),
            "body": program_to_dict(stmt.body),
        }
    elif isinstance(stmt, Print):
        return {"kind": "print", "expression": expression_to_dict(stmt.expression)}
    elif isinstance(stmt, ExpressionStatement):
        return {"kind": "expression", "expression": expression_to_dict(stmt.expression)}
    elif isinstance(stmt, Return):
        return {"kind": "return", "expression": expression_to_dict(stmt.expression)}
    else:
        raise UnknownStatement(type(stmt).__name__)


def program_to_dict(program: Program) -> List[Dict[str, Any]]:
    """Convert a statement list to a list of JSON objects."""
    return [statement_to_dict(stmt) for stmt in program]


def program_to_json(program: Program, indent: int = 2) -> str:
    """Convert a program to JSON text."""
    return json.dumps(program_to_dict(program), indent=indent)
