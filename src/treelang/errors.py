"""
treelang exceptions and error handling.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: AST schema errors (node kinds outside the recognized set)
- E4xx: Runtime errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from .tokens import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity = ErrorSeverity.ERROR
    span: Optional[SourceSpan] = None   # Runtime errors carry no location
    source_line: Optional[str] = None   # The actual line of source code
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        # Header: [location: ]severity[code]: message
        header = f"{self.severity.value}[{self.code}]: {self.message}"
        if self.span is not None:
            header = f"{self.span.start}: {header}"
        parts.append(header)

        # Source line with caret
        if show_source and self.source_line is not None and self.span is not None:
            parts.append("  |")
            line_num = str(self.span.start.line)
            parts.append(f"{line_num:>3} | {self.source_line}")

            col = self.span.start.column
            if self.span.start.line == self.span.end.line:
                end_col = self.span.end.column
            else:
                end_col = len(self.source_line) + 1
            underline_len = max(1, end_col - col)
            parts.append(f"    | {' ' * (col - 1)}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)


class TreelangError(Exception):
    """Base exception for all treelang errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(TreelangError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(TreelangError):
    """Error during parsing (E1xx)."""
    pass


class InterpreterError(TreelangError):
    """
    Error raised while evaluating a program.

    `state` holds the root frame bindings as they were when the run aborted.
    It is filled in by the program driver; errors raised from `evaluate` or
    `execute` directly leave it as None.
    """

    error_code: str = "E400"

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        super().__init__(Diagnostic(code=self.error_code, message=message, hints=hints or []))
        self.state: Optional[Dict[str, Any]] = None


# --- AST schema errors ---

class UnknownExpression(InterpreterError):
    """E201: Expression node outside the recognized set."""
    error_code = "E201"

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(
            f"unknown expression: {kind}",
            hints=["the parser and evaluator disagree on the AST schema"],
        )


class UnknownStatement(InterpreterError):
    """E202: Statement node outside the recognized set."""
    error_code = "E202"

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(
            f"unknown statement: {kind}",
            hints=["the parser and evaluator disagree on the AST schema"],
        )


# --- Runtime errors ---

class UndefinedVariable(InterpreterError):
    """E401: Variable read with no binding in any visible frame."""
    error_code = "E401"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined variable: {name}")


class DuplicateDeclaration(InterpreterError):
    """E402: `let` re-declares a name already bound in the same frame."""
    error_code = "E402"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"duplicate variable declaration: {name}",
            hints=[f"use '{name} = ...' to change an existing variable"],
        )


class AssignmentToUndeclared(InterpreterError):
    """E403: Assignment target not found anywhere in the scope chain."""
    error_code = "E403"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"assignment to undeclared variable: {name}",
            hints=[f"declare it first with 'let {name} = ...'"],
        )


class TypeError(InterpreterError):
    """E404: Operand of the wrong kind for an operator."""
    error_code = "E404"

    def __init__(self, message: str, operator: str,
                 left_kind: Optional[str] = None, right_kind: Optional[str] = None):
        self.operator = operator
        self.left_kind = left_kind
        self.right_kind = right_kind
        super().__init__(message)


class DivisionByZero(InterpreterError):
    """E405: Right operand of `/` is zero."""
    error_code = "E405"

    def __init__(self):
        super().__init__("division by zero")


class NonBooleanCondition(InterpreterError):
    """E406: `if` or `while` test did not evaluate to a boolean."""
    error_code = "E406"

    def __init__(self, statement: str, kind: str):
        self.statement = statement
        self.kind = kind
        super().__init__(f"{statement} condition must evaluate to a boolean, got {kind}")


class NotCallable(InterpreterError):
    """E407: Call target is not a function."""
    error_code = "E407"

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(f"'{name}' is not a function, got {kind}")


class ArityMismatch(InterpreterError):
    """E408: Wrong number of arguments in a call."""
    error_code = "E408"

    def __init__(self, name: str, expected: int, got: int):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(f"'{name}' expects {expected} argument(s), got {got}")


class MissingReturnValue(InterpreterError):
    """E409: A call was used as a value but its body never returned."""
    error_code = "E409"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' finished without returning a value")


class ReturnOutsideFunction(InterpreterError):
    """E410: `return` executed outside any function body."""
    error_code = "E410"

    def __init__(self):
        super().__init__("return statement outside of a function")


class RecursionLimitExceeded(InterpreterError):
    """E411: Python stack exhausted by deep calls or deeply nested expressions."""
    error_code = "E411"

    def __init__(self):
        super().__init__(
            "maximum recursion depth exceeded",
            hints=["check for unbounded recursion or split very long expressions"],
        )


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character '{char}'",
        span=span,
        source_line=source_line,
    )
    return LexerError(diag)


def error_invalid_number_literal(text: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E002: Invalid number literal."""
    diag = Diagnostic(
        code="E002",
        message=f"invalid number literal '{text}'",
        span=span,
        source_line=source_line,
        hints=["number literals need digits on both sides of '.': 0.5, 12.25"],
    )
    return LexerError(diag)


def error_incomplete_operator(text: str, expected: str, span: SourceSpan,
                              source_line: str = None) -> LexerError:
    """E003: Operator prefix without its remaining characters."""
    diag = Diagnostic(
        code="E003",
        message=f"unexpected '{text}'",
        span=span,
        source_line=source_line,
        hints=[f"did you mean '{expected}'?"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str, span: SourceSpan,
                           source_line: str = None) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {found}",
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_unexpected_eof(expected: str, span: SourceSpan) -> ParserError:
    """E102: Unexpected end of file."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of file, expected {expected}",
        span=span,
    )
    return ParserError(diag)


def error_not_an_expression(span: Optional[SourceSpan] = None) -> ParserError:
    """E103: Source given to parse_expression is not a single expression."""
    diag = Diagnostic(
        code="E103",
        message="expected exactly one expression",
        span=span,
    )
    return ParserError(diag)
