"""
Abstract Syntax Tree (AST) node definitions for treelang.

The AST represents the structure of a parsed program, which the runtime
interpreter walks directly. Expressions and statements are closed sets of
dataclasses; the interpreter rejects anything else.

Every node has an optional keyword-only `span`. Spans are left out of
equality so that parsed trees compare equal to hand-built ones.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Union, Any
from abc import ABC
from .tokens import SourceSpan


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""
    span: Optional[SourceSpan] = field(default=None, kw_only=True, compare=False, repr=False)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


class BinaryOperator(Enum):
    """Binary operators, valued by their source spelling."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    AND = "&&"
    OR = "||"
    GREATER = ">"
    LESS = "<"
    STRICT_EQUAL = "==="

    def __str__(self) -> str:
        return self.value


ARITHMETIC_OPERATORS = frozenset({
    BinaryOperator.ADD, BinaryOperator.SUBTRACT,
    BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE,
})

COMPARISON_OPERATORS = frozenset({BinaryOperator.GREATER, BinaryOperator.LESS})

LOGICAL_OPERATORS = frozenset({BinaryOperator.AND, BinaryOperator.OR})


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass
class NumberLiteral(Expression):
    """A number literal (always a float at runtime)."""
    value: float


@dataclass
class BooleanLiteral(Expression):
    """A boolean literal."""
    value: bool


@dataclass
class Variable(Expression):
    """A variable reference."""
    name: str


@dataclass
class BinaryOp(Expression):
    """A binary operation (e.g., a + b, x && y)."""
    operator: BinaryOperator
    left: Expression
    right: Expression


@dataclass
class FunctionLiteral(Expression):
    """An anonymous function (e.g., function(a, b) { return a + b; })."""
    parameters: List[str]
    body: List["Statement"]


@dataclass
class Call(Expression):
    """A call of a named function (e.g., f(1, 2))."""
    callee: str
    arguments: List[Expression]


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Statement(AstNode):
    """Base class for all statements."""
    pass


@dataclass
class Let(Statement):
    """A declaration in the current frame (e.g., let x = 1;)."""
    name: str
    expression: Expression


@dataclass
class Assignment(Statement):
    """An assignment to an existing variable (e.g., x = 5;)."""
    name: str
    expression: Expression


@dataclass
class If(Statement):
    """An if statement. An absent else branch is an empty list."""
    test: Expression
    true_part: List[Statement]
    false_part: List[Statement] = field(default_factory=list)


@dataclass
class While(Statement):
    """A while loop."""
    test: Expression
    body: List[Statement]


@dataclass
class Print(Statement):
    """A print statement."""
    expression: Expression


@dataclass
class ExpressionStatement(Statement):
    """An expression used as a statement."""
    expression: Expression


@dataclass
class Return(Statement):
    """A return statement (only valid inside a function body)."""
    expression: Expression


Program = List[Statement]


# =============================================================================
# Visitor Helpers
# =============================================================================

class PrintVisitor(AstVisitor):
    """Debug visitor that prints the AST structure."""

    def __init__(self, indent: int = 0):
        self.indent = indent

    def _print(self, text: str) -> None:
        print("  " * self.indent + text)

    def generic_visit(self, node: AstNode) -> None:
        self._print(f"{node.__class__.__name__}")
        for name, value in node.__dict__.items():
            if name == "span":
                continue
            if isinstance(value, AstNode):
                self._print(f"  {name}:")
                PrintVisitor(self.indent + 2).generic_visit(value)
            elif isinstance(value, list):
                self._print(f"  {name}: [")
                for item in value:
                    if isinstance(item, AstNode):
                        PrintVisitor(self.indent + 2).generic_visit(item)
                    else:
                        self._print(f"    {item!r}")
                self._print("  ]")
            else:
                self._print(f"  {name}: {value!r}")


def print_ast(node: Union[AstNode, Program]) -> None:
    """Print an AST node (or a whole program) for debugging."""
    if isinstance(node, list):
        for stmt in node:
            PrintVisitor().generic_visit(stmt)
        return
    PrintVisitor().generic_visit(node)
