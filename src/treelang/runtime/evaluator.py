"""
Frame-level entry points.

These operate on a caller-supplied Frame, which makes them convenient for
embedding and for testing single expressions and statements:

    frame = Frame()
    frame.set("x", number_val(2))
    evaluate(frame, BinaryOp(BinaryOperator.MULTIPLY, Variable("x"), NumberLiteral(3.0)))
"""

from typing import Dict, Optional

from .values import Value
from .context import Frame, OutputSink, create_context
from .interpreter import Interpreter
from ..ast import Expression, Statement, Program


def evaluate(frame: Frame, expression: Expression) -> Value:
    """Evaluate an expression against `frame` and its ancestors."""
    ctx = create_context(frame)
    return Interpreter().evaluate(expression, ctx)


def execute(frame: Frame, statement: Statement, output: Optional[OutputSink] = None) -> None:
    """Execute one statement with `frame` as the current frame."""
    ctx = create_context(frame, output)
    Interpreter(output).execute_statement(statement, ctx)


def run(program: Program, output: Optional[OutputSink] = None) -> Dict[str, Value]:
    """
    Run a program in a fresh root frame and return the root bindings.

    On failure the raised InterpreterError carries the root bindings as
    they were at that point in its `state` attribute.
    """
    return Interpreter(output).run(program)
