"""
Tree-walking interpreter for treelang.

Evaluates AST nodes directly against a chain of scope frames, producing
variable bindings and printed output.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .values import (
    Value, Closure,
    number_val, bool_val, function_val,
    unwrap_bindings, format_value,
)
from .context import ExecutionContext, Frame, OutputSink, create_context

from ..ast import (
    Program,
    Statement, Let, Assignment, If, While, Print, ExpressionStatement, Return,
    Expression, NumberLiteral, BooleanLiteral, Variable, BinaryOp,
    FunctionLiteral, Call,
    BinaryOperator, ARITHMETIC_OPERATORS, COMPARISON_OPERATORS, LOGICAL_OPERATORS,
)
from ..errors import (
    TreelangError, LexerError, ParserError, InterpreterError,
    UnknownExpression, UnknownStatement,
    UndefinedVariable, DuplicateDeclaration, AssignmentToUndeclared,
    TypeError as OperandTypeError,
    DivisionByZero, NonBooleanCondition,
    NotCallable, ArityMismatch, MissingReturnValue, ReturnOutsideFunction,
    RecursionLimitExceeded,
)

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result of running a program."""
    success: bool
    state: Dict[str, Value] = field(default_factory=dict)
    printed: List[Value] = field(default_factory=list)
    error: Optional[TreelangError] = None
    error_message: Optional[str] = None

    @property
    def bindings(self) -> Dict[str, Any]:
        """Final top-level bindings as raw Python values."""
        return unwrap_bindings(self.state)

    @property
    def output_lines(self) -> List[str]:
        """Printed values rendered as text."""
        return [format_value(v) for v in self.printed]


class Interpreter:
    """
    Tree-walking interpreter for treelang programs.

    Evaluates AST nodes by dispatching to type-specific methods.
    """

    def __init__(self, output: Optional[OutputSink] = None):
        """
        Initialize the interpreter.

        Args:
            output: Optional callable receiving each printed Value
        """
        self.output = output

    def run(self, program: Program) -> Dict[str, Value]:
        """
        Run a program in a fresh root frame and return its bindings.

        Raises:
            InterpreterError: on the first runtime failure, with `state`
                set to the root bindings at that point
        """
        ctx = create_context(output=self.output)
        self._run(program, ctx)
        return ctx.current_frame.snapshot()

    def execute(self, program: Program) -> ExecutionResult:
        """Run a program, reporting failure in the result instead of raising."""
        ctx = create_context(output=self.output)
        try:
            self._run(program, ctx)
        except InterpreterError as e:
            return ExecutionResult(
                success=False,
                state=e.state or {},
                printed=ctx.printed,
                error=e,
                error_message=e.diagnostic.message,
            )
        return ExecutionResult(
            success=True,
            state=ctx.current_frame.snapshot(),
            printed=ctx.printed,
        )

    def evaluate(self, expr: Expression, ctx: ExecutionContext) -> Value:
        """Evaluate an expression in the context's current frame."""
        return self._evaluate(expr, ctx)

    def execute_statement(self, stmt: Statement, ctx: ExecutionContext) -> None:
        """Execute a statement in the context's current frame."""
        self._execute_statement(stmt, ctx)

    def _run(self, program: Program, ctx: ExecutionContext) -> None:
        root = ctx.current_frame
        try:
            for stmt in program:
                self._execute_statement(stmt, ctx)
        except InterpreterError as e:
            e.state = root.snapshot()
            logger.debug("run aborted: %s", e.diagnostic.message)
            raise
        except RecursionError as e:
            err = RecursionLimitExceeded()
            err.state = root.snapshot()
            logger.debug("run aborted: %s", err.diagnostic.message)
            raise err from e
        logger.info(
            "program finished: %d statement(s), %d binding(s), %d value(s) printed",
            len(program), len(root.variables), len(ctx.printed),
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _execute_statement(self, stmt: Statement, ctx: ExecutionContext) -> None:
        """Execute a statement."""
        if isinstance(stmt, Let):
            self._execute_let(stmt, ctx)
        elif isinstance(stmt, Assignment):
            self._execute_assignment(stmt, ctx)
        elif isinstance(stmt, If):
            self._execute_if_statement(stmt, ctx)
        elif isinstance(stmt, While):
            self._execute_while(stmt, ctx)
        elif isinstance(stmt, Print):
            self._execute_print(stmt, ctx)
        elif isinstance(stmt, ExpressionStatement):
            self._execute_expression_statement(stmt, ctx)
        elif isinstance(stmt, Return):
            self._execute_return(stmt, ctx)
        else:
            raise UnknownStatement(type(stmt).__name__)

    def _execute_let(self, stmt: Let, ctx: ExecutionContext) -> None:
        """Execute a let statement."""
        if ctx.current_frame.has_local(stmt.name):
            raise DuplicateDeclaration(stmt.name)
        value = self._evaluate(stmt.expression, ctx)
        if value.is_function and value.data.name is None:
            value.data.name = stmt.name
        ctx.set_variable(stmt.name, value)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("let %s = %s", stmt.name, format_value(value))

    def _execute_assignment(self, stmt: Assignment, ctx: ExecutionContext) -> None:
        """Execute an assignment statement."""
        target = ctx.current_frame.find(stmt.name)
        if target is None:
            raise AssignmentToUndeclared(stmt.name)
        value = self._evaluate(stmt.expression, ctx)
        target.set(stmt.name, value)

    def _execute_if_statement(self, stmt: If, ctx: ExecutionContext) -> None:
        """Execute an if statement."""
        condition = self._evaluate(stmt.test, ctx)
        if not condition.is_boolean:
            raise NonBooleanCondition("if", str(condition.kind))

        if condition.data:
            self._execute_block(stmt.true_part, ctx, "if-then")
        else:
            self._execute_block(stmt.false_part, ctx, "if-else")

    def _execute_while(self, stmt: While, ctx: ExecutionContext) -> None:
        """Execute a while loop; each iteration runs in a fresh frame."""
        while True:
            condition = self._evaluate(stmt.test, ctx)
            if not condition.is_boolean:
                raise NonBooleanCondition("while", str(condition.kind))
            if not condition.data:
                break
            self._execute_block(stmt.body, ctx, "while-body")
            if ctx.should_return:
                return

    def _execute_print(self, stmt: Print, ctx: ExecutionContext) -> None:
        """Execute a print statement."""
        value = self._evaluate(stmt.expression, ctx)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("print %s", format_value(value))
        ctx.emit(value)

    def _execute_expression_statement(self, stmt: ExpressionStatement, ctx: ExecutionContext) -> None:
        """Evaluate an expression for its effects and discard the result."""
        if isinstance(stmt.expression, Call):
            self._eval_call(stmt.expression, ctx, require_value=False)
        else:
            self._evaluate(stmt.expression, ctx)

    def _execute_return(self, stmt: Return, ctx: ExecutionContext) -> None:
        """Execute a return statement."""
        if ctx.call_depth == 0:
            raise ReturnOutsideFunction()
        value = self._evaluate(stmt.expression, ctx)
        ctx.signal_return(value)

    def _execute_block(self, statements: List[Statement], ctx: ExecutionContext, name: str) -> None:
        """Execute statements in a new child frame, stopping on return."""
        with ctx.new_scope(name):
            for stmt in statements:
                self._execute_statement(stmt, ctx)
                if ctx.should_return:
                    return

    # =========================================================================
    # Expressions
    # =========================================================================

    def _evaluate(self, expr: Expression, ctx: ExecutionContext) -> Value:
        """Evaluate an expression to produce a Value."""
        if isinstance(expr, NumberLiteral):
            return number_val(expr.value)
        elif isinstance(expr, BooleanLiteral):
            return bool_val(expr.value)
        elif isinstance(expr, Variable):
            return self._eval_variable(expr, ctx)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr, ctx)
        elif isinstance(expr, FunctionLiteral):
            return self._eval_function_literal(expr, ctx)
        elif isinstance(expr, Call):
            return self._eval_call(expr, ctx)
        else:
            raise UnknownExpression(type(expr).__name__)

    def _eval_variable(self, var: Variable, ctx: ExecutionContext) -> Value:
        """Evaluate a variable reference (lookup through the frame chain)."""
        value = ctx.get_variable(var.name)
        if value is None:
            raise UndefinedVariable(var.name)
        return value

    def _eval_binary_op(self, op: BinaryOp, ctx: ExecutionContext) -> Value:
        """Evaluate a binary operation."""
        operator = op.operator

        # Short-circuit: only the left operand is checked
        if operator in LOGICAL_OPERATORS:
            left = self._evaluate(op.left, ctx)
            if not left.is_boolean:
                raise OperandTypeError(
                    f"left operand of {operator} must be boolean",
                    str(operator), left_kind=str(left.kind),
                )
            if operator == BinaryOperator.AND and not left.data:
                return bool_val(False)
            if operator == BinaryOperator.OR and left.data:
                return bool_val(True)
            return self._evaluate(op.right, ctx)

        if operator == BinaryOperator.STRICT_EQUAL:
            left = self._evaluate(op.left, ctx)
            right = self._evaluate(op.right, ctx)
            return bool_val(left.strict_equals(right))

        if operator in ARITHMETIC_OPERATORS:
            category = "arithmetic"
        elif operator in COMPARISON_OPERATORS:
            category = "comparison"
        else:
            raise UnknownExpression(f"operator {operator}")

        left = self._evaluate(op.left, ctx)
        right = self._evaluate(op.right, ctx)
        if not (left.is_number and right.is_number):
            raise OperandTypeError(
                f"{category} operations require numbers, got {left.kind} and {right.kind}",
                str(operator), left_kind=str(left.kind), right_kind=str(right.kind),
            )

        a, b = left.data, right.data
        if operator == BinaryOperator.ADD:
            return number_val(a + b)
        elif operator == BinaryOperator.SUBTRACT:
            return number_val(a - b)
        elif operator == BinaryOperator.MULTIPLY:
            return number_val(a * b)
        elif operator == BinaryOperator.DIVIDE:
            if b == 0:
                raise DivisionByZero()
            return number_val(a / b)
        elif operator == BinaryOperator.LESS:
            return bool_val(a < b)
        else:
            return bool_val(a > b)

    def _eval_function_literal(self, func: FunctionLiteral, ctx: ExecutionContext) -> Value:
        """Create a closure over the current frame."""
        return function_val(Closure(list(func.parameters), func.body, ctx.current_frame))

    def _eval_call(self, call: Call, ctx: ExecutionContext, require_value: bool = True) -> Optional[Value]:
        """
        Evaluate a function call.

        Arguments are evaluated left to right in the caller's frame. The body
        runs in a new frame whose parent is the frame the closure captured.
        """
        callee = ctx.get_variable(call.callee)
        if callee is None:
            raise UndefinedVariable(call.callee)
        if not callee.is_function:
            raise NotCallable(call.callee, str(callee.kind))

        closure: Closure = callee.data
        if len(call.arguments) != len(closure.parameters):
            raise ArityMismatch(call.callee, len(closure.parameters), len(call.arguments))

        args = [self._evaluate(arg, ctx) for arg in call.arguments]

        frame = Frame(parent=closure.frame, name=f"call:{call.callee}")
        for param, arg in zip(closure.parameters, args):
            frame.set(param, arg)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("call %s(%s)", call.callee, ", ".join(format_value(a) for a in args))
        ctx.call_depth += 1
        try:
            with ctx.enter_frame(frame):
                for stmt in closure.body:
                    self._execute_statement(stmt, ctx)
                    if ctx.should_return:
                        break
        finally:
            ctx.call_depth -= 1

        returned = ctx.should_return
        value = ctx.return_value
        ctx.clear_return()

        if not returned:
            if require_value:
                raise MissingReturnValue(call.callee)
            return None
        return value


# Convenience functions for simple execution

def execute(program: Program, output: Optional[OutputSink] = None) -> ExecutionResult:
    """
    Run a program and report the outcome.

    This is a convenience wrapper around Interpreter.execute().
    """
    interpreter = Interpreter(output)
    return interpreter.execute(program)


def compile_and_run(
    source: str,
    output: Optional[OutputSink] = None,
    filename: Optional[str] = None,
) -> ExecutionResult:
    """
    High-level API to parse and run treelang source code in one call.

        from treelang import compile_and_run

        result = compile_and_run('''
            let total = 0;
            let i = 0;
            while (i < 3) { i = i + 1; total = total + i; }
            print(total);
        ''')

        if result.success:
            print(result.bindings)   # {'total': 6.0, 'i': 3.0}
        else:
            print(f"Error: {result.error_message}")

    Args:
        source: treelang source code as a string
        output: Optional callable receiving each printed Value
        filename: Optional filename for error messages

    Returns:
        ExecutionResult with final state, printed values and any error
    """
    from ..lexer import tokenize
    from ..parser import parse

    try:
        tokens = tokenize(source, filename)
    except LexerError as e:
        return ExecutionResult(
            success=False,
            error=e,
            error_message=f"Lexer error: {e.diagnostic.message}",
        )

    try:
        program = parse(tokens, filename, source)
    except ParserError as e:
        return ExecutionResult(
            success=False,
            error=e,
            error_message=f"Parser error: {e.diagnostic.message}",
        )

    return execute(program, output)
