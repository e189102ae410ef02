"""
Tests for the treelang runtime (values, frames, interpreter).
"""

import logging
import math
import textwrap

import pytest

from treelang import (
    parse_program, parse_expression,
    Interpreter, ExecutionResult, execute, compile_and_run, run, evaluate, execute_statement,
    Frame, Value, ValueKind, format_value,
    Let, Assignment, If, While, Print, Return, ExpressionStatement,
    NumberLiteral, BooleanLiteral, Variable, BinaryOp, BinaryOperator, Call,
    InterpreterError, UnknownExpression, UnknownStatement,
    UndefinedVariable, DuplicateDeclaration, AssignmentToUndeclared,
    DivisionByZero, NonBooleanCondition,
    NotCallable, ArityMismatch, MissingReturnValue, ReturnOutsideFunction,
    RecursionLimitExceeded,
)
from treelang import TypeError as OperandTypeError
from treelang.runtime import (
    number_val, bool_val, function_val, Closure,
    wrap_value, unwrap_value, unwrap_bindings, to_plain,
    ExecutionContext, create_context,
)
from treelang.runtime import interpreter as interpreter_module


def frame_with(**bindings) -> Frame:
    """Helper building a root frame from raw Python values."""
    frame = Frame()
    for name, raw in bindings.items():
        frame.set(name, wrap_value(raw))
    return frame


def eval_source(source: str, **bindings) -> Value:
    """Helper evaluating an expression source against raw bindings."""
    return evaluate(frame_with(**bindings), parse_expression(source))


def run_source(source: str) -> dict:
    """Helper running a program and returning unwrapped root bindings."""
    return unwrap_bindings(run(parse_program(textwrap.dedent(source))))


# --- Value Tests ---

class TestValues:
    """Test runtime value wrappers."""

    def test_number_value(self):
        """Numbers are stored as floats."""
        v = number_val(3)
        assert v.data == 3.0
        assert isinstance(v.data, float)
        assert v.kind == ValueKind.NUMBER

    def test_bool_value(self):
        """Test boolean value creation."""
        v = bool_val(True)
        assert v.data is True
        assert v.kind == ValueKind.BOOLEAN

    def test_wrap_value(self):
        """wrap_value picks the kind from the Python type."""
        assert wrap_value(True).kind == ValueKind.BOOLEAN
        assert wrap_value(2).kind == ValueKind.NUMBER
        assert unwrap_value(wrap_value(2.5)) == 2.5

    def test_wrap_unsupported(self):
        """Strings are not treelang values."""
        with pytest.raises(ValueError):
            wrap_value("text")

    def test_strict_equals_compares_kind(self):
        """A boolean never equals a number."""
        assert not bool_val(True).strict_equals(number_val(1))
        assert number_val(1).strict_equals(number_val(1.0))

    def test_functions_equal_only_to_themselves(self):
        """Function values compare by identity."""
        closure = Closure([], [], Frame())
        other = Closure([], [], Frame())
        assert function_val(closure).strict_equals(function_val(closure))
        assert not function_val(closure).strict_equals(function_val(other))

    @pytest.mark.parametrize("value,text", [
        (number_val(3), "3"),
        (number_val(2.5), "2.5"),
        (number_val(-0.0), "0"),
        (number_val(math.inf), "Infinity"),
        (number_val(-math.inf), "-Infinity"),
        (number_val(math.nan), "NaN"),
        (bool_val(True), "true"),
        (bool_val(False), "false"),
    ])
    def test_format_value(self, value, text):
        """Values print in the language's own notation."""
        assert format_value(value) == text

    def test_format_function(self):
        """Functions print with their parameter list."""
        assert format_value(function_val(Closure(["a", "b"], [], Frame()))) == "<function(a, b)>"

    def test_to_plain(self):
        """to_plain gives JSON friendly objects."""
        assert to_plain(number_val(3)) == 3
        assert isinstance(to_plain(number_val(3)), int)
        assert to_plain(number_val(0.5)) == 0.5
        assert to_plain(number_val(math.inf)) == "Infinity"
        assert to_plain(bool_val(False)) is False


# --- Frame and Context Tests ---

class TestFrames:
    """Test scope frames and the execution context."""

    def test_lookup_walks_parents(self):
        """Lookup finds bindings in enclosing frames."""
        root = frame_with(x=1)
        child = root.child()
        assert child.get("x").data == 1.0
        assert child.get("missing") is None

    def test_shadowing(self):
        """Inner bindings shadow outer ones."""
        root = frame_with(x=1)
        child = root.child()
        child.set("x", number_val(2))
        assert child.get("x").data == 2.0
        assert root.get("x").data == 1.0

    def test_find_returns_defining_frame(self):
        """find() returns the frame where the name lives."""
        root = frame_with(x=1)
        child = root.child()
        assert child.find("x") is root
        assert child.find("missing") is None

    def test_assignment_writes_defining_frame(self):
        """Assignment in a child frame mutates the parent binding."""
        root = frame_with(x=1)
        child = root.child()
        execute_statement(child, Assignment("x", NumberLiteral(5.0)))
        assert root.get("x").data == 5.0
        assert not child.has_local("x")

    def test_new_scope_restores_frame(self):
        """new_scope pushes a child and restores the old frame."""
        ctx = create_context()
        root = ctx.current_frame
        with ctx.new_scope("inner") as inner:
            assert ctx.current_frame is inner
            assert inner.parent is root
            ctx.set_variable("y", number_val(1))
        assert ctx.current_frame is root
        assert ctx.get_variable("y") is None

    def test_new_scope_restores_on_error(self):
        """The frame is restored even when the block raises."""
        ctx = create_context()
        root = ctx.current_frame
        with pytest.raises(RuntimeError):
            with ctx.new_scope():
                raise RuntimeError("boom")
        assert ctx.current_frame is root

    def test_return_signal(self):
        """Return signaling and clearing."""
        ctx = ExecutionContext()
        assert not ctx.should_return
        ctx.signal_return(number_val(1))
        assert ctx.should_return
        assert ctx.return_value.data == 1.0
        ctx.clear_return()
        assert not ctx.should_return
        assert ctx.return_value is None

    def test_frame_depth(self):
        """Depth counts ancestors."""
        assert Frame().child().child().depth == 2


# --- Expression Tests ---

class TestExpressions:
    """Test expression evaluation."""

    def test_multiplication_with_variable(self):
        """x * 2 with x = 10."""
        assert eval_source("x * 2", x=10) == number_val(20)

    def test_arithmetic(self):
        """All four arithmetic operators."""
        assert eval_source("7 - 2").data == 5.0
        assert eval_source("7 + 2").data == 9.0
        assert eval_source("7 / 2").data == 3.5
        assert eval_source("7 * 2").data == 14.0

    def test_complex_expression(self):
        """2 + 3 * 4 === 14."""
        assert eval_source("2 + 3 * 4 === 14").data is True

    def test_comparison(self):
        """Comparison operators yield booleans."""
        assert eval_source("5 < 10").data is True
        assert eval_source("5 > 10").data is False

    def test_strict_equality(self):
        """=== compares kind and value."""
        assert eval_source("5 === 5").data is True
        assert eval_source("true === true").data is True
        assert eval_source("1 === true").data is False

    def test_strict_equality_nan(self):
        """NaN is not equal to itself."""
        assert eval_source("x === x", x=math.nan).data is False

    def test_strict_equality_signed_zero(self):
        """-0 === 0."""
        assert eval_source("-0 === 0").data is True

    def test_infinity_arithmetic(self):
        """Non-finite results are ordinary numbers."""
        assert eval_source("Infinity - Infinity").data != eval_source("Infinity - Infinity").data
        assert eval_source("-Infinity * 2").data == -math.inf

    def test_undefined_variable(self):
        """Reading an unbound name fails."""
        with pytest.raises(UndefinedVariable) as exc_info:
            eval_source("y + 2")
        assert exc_info.value.name == "y"
        assert "undefined variable" in exc_info.value.diagnostic.message

    def test_division_by_zero(self):
        """Dividing by zero fails."""
        with pytest.raises(DivisionByZero, match="division by zero"):
            eval_source("5 / 0")

    def test_division_by_negative_zero(self):
        """Dividing by -0 fails too."""
        with pytest.raises(DivisionByZero):
            eval_source("5 / -0")

    def test_division_type_check_first(self):
        """The numeric check happens before the zero check."""
        with pytest.raises(OperandTypeError):
            eval_source("true / 0")

    def test_arithmetic_requires_numbers(self):
        """Arithmetic on a boolean fails with both kinds named."""
        with pytest.raises(OperandTypeError) as exc_info:
            eval_source("x * 2", x=False)
        err = exc_info.value
        assert err.diagnostic.message == "arithmetic operations require numbers, got boolean and number"
        assert err.operator == "*"
        assert err.left_kind == "boolean"
        assert err.right_kind == "number"

    def test_comparison_requires_numbers(self):
        """Comparison on a boolean fails."""
        with pytest.raises(OperandTypeError) as exc_info:
            eval_source("x < 2", x=False)
        assert exc_info.value.diagnostic.message == (
            "comparison operations require numbers, got boolean and number"
        )

    def test_type_error_is_interpreter_error(self):
        """Operand errors are interpreter errors, not Python TypeErrors."""
        with pytest.raises(InterpreterError):
            eval_source("true + 1")


class TestShortCircuit:
    """Test && and || evaluation."""

    def test_and_short_circuits(self):
        """false && (1 / 0) never divides."""
        assert eval_source("x && (1 / 0)", x=False).data is False

    def test_or_short_circuits(self):
        """true || (1 / 0) never divides."""
        assert eval_source("x || (1 / 0)", x=True).data is True

    def test_and_evaluates_right(self):
        """true && (5 === 5)."""
        assert eval_source("x && (5 === 5)", x=True).data is True

    def test_right_operand_not_checked(self):
        """The right operand's value is returned as is."""
        assert eval_source("true && 2") == number_val(2)
        assert eval_source("false || 3") == number_val(3)

    def test_and_left_must_be_boolean(self):
        """Non-boolean left operand of && fails."""
        with pytest.raises(OperandTypeError, match="left operand of && must be boolean"):
            eval_source("x && 2", x=1)

    def test_or_left_must_be_boolean(self):
        """Non-boolean left operand of || fails."""
        with pytest.raises(OperandTypeError, match=r"left operand of \|\| must be boolean"):
            eval_source("x || 2", x=1)

    def test_unknown_expression(self):
        """Nodes outside the expression set are rejected."""
        with pytest.raises(UnknownExpression, match="unknown expression"):
            evaluate(Frame(), object())


# --- Statement Tests ---

class TestStatements:
    """Test single statement execution against a frame."""

    def test_assignment_to_undeclared(self):
        """Assigning an unbound name fails."""
        frame = frame_with(x=10)
        with pytest.raises(AssignmentToUndeclared, match="assignment to undeclared variable"):
            execute_statement(frame, Assignment("y", NumberLiteral(5.0)))

    def test_assignment_checks_before_evaluating(self):
        """The target is checked before the expression runs."""
        with pytest.raises(AssignmentToUndeclared):
            execute_statement(Frame(), Assignment("y", Variable("also_missing")))

    def test_duplicate_declaration(self):
        """let on a name in the same frame fails."""
        frame = frame_with(x=5)
        with pytest.raises(DuplicateDeclaration, match="duplicate variable declaration"):
            execute_statement(frame, Let("x", NumberLiteral(10.0)))
        assert frame.get("x").data == 5.0

    def test_duplicate_checked_before_evaluating(self):
        """Duplicate declaration wins over errors in the expression."""
        with pytest.raises(DuplicateDeclaration):
            execute_statement(frame_with(x=5), Let("x", Variable("missing")))

    def test_if_branch_bindings_discarded(self):
        """Bindings made in a branch do not leak."""
        frame = Frame()
        execute_statement(frame, If(
            BooleanLiteral(True),
            [Let("x", NumberLiteral(1.0))],
            [Let("x", NumberLiteral(0.0))],
        ))
        assert not frame.has_local("x")

    def test_if_condition_must_be_boolean(self):
        """Numeric if test fails."""
        with pytest.raises(NonBooleanCondition, match="if condition must evaluate to a boolean"):
            execute_statement(Frame(), If(NumberLiteral(1.0), [], []))

    def test_else_updates_outer(self):
        """Assignment in the else branch reaches the outer frame."""
        frame = frame_with(x=1)
        execute_statement(frame, If(
            BooleanLiteral(False), [], [Assignment("x", NumberLiteral(99.0))],
        ))
        assert frame.get("x").data == 99.0

    def test_print(self):
        """Print sends the value to the output sink."""
        seen = []
        execute_statement(frame_with(x=1), Print(Variable("x")), output=seen.append)
        assert seen == [number_val(1)]

    def test_print_undefined(self):
        """Printing an unbound name fails."""
        with pytest.raises(UndefinedVariable):
            execute_statement(Frame(), Print(Variable("x")))

    def test_while_condition_must_be_boolean(self):
        """Numeric while test fails."""
        with pytest.raises(NonBooleanCondition, match="while condition"):
            execute_statement(Frame(), While(NumberLiteral(1.0), []))

    def test_while_zero_iterations(self):
        """A false test runs the body zero times."""
        frame = frame_with(x=0)
        execute_statement(frame, While(BooleanLiteral(False), [Assignment("x", NumberLiteral(1.0))]))
        assert frame.get("x").data == 0.0

    def test_unknown_statement(self):
        """Nodes outside the statement set are rejected."""
        with pytest.raises(UnknownStatement, match="unknown statement"):
            execute_statement(Frame(), object())

    def test_return_outside_function(self):
        """return at top level fails."""
        with pytest.raises(ReturnOutsideFunction):
            execute_statement(Frame(), Return(NumberLiteral(1.0)))


# --- Program Tests ---

class TestPrograms:
    """Test whole-program runs."""

    def test_declaration_and_reassignment(self):
        """let then assign."""
        assert run_source("""
            let x = 10;
            x = 20;
        """) == {"x": 20.0}

    def test_arithmetic_and_variables(self):
        """Chained declarations."""
        assert run_source("""
            let a = 4;
            let b = a + 6;
            let c = b * 2;
        """) == {"a": 4.0, "b": 10.0, "c": 20.0}

    def test_while_loop(self):
        """Counting loop runs its body exactly three times."""
        result = compile_and_run("""
            let x = 0;
            while (x < 3) {
                x = x + 1;
                print(x);
            }
        """)
        assert result.success
        assert result.output_lines == ["1", "2", "3"]
        assert result.bindings == {"x": 3.0}

    def test_block_with_multiple_statements(self):
        """Statements in a branch run in order."""
        assert run_source("""
            let x = 1;    if (true) {
                x = x + 1;
                x = x * 2;
            } else {
            }
        """) == {"x": 4.0}

    def test_inner_let_does_not_leak(self):
        """let in a branch does not touch the outer binding."""
        assert run_source("""
            let x = 1;
            if (true) {
                let x = 2;
            } else {
            }
        """) == {"x": 1.0}

    def test_inner_let_shadows(self):
        """Inner binding is visible inside the branch."""
        assert run_source("""
            let x = 1;
            let y = 0;
            if (true) {
                let x = 2;
                y = x;
            } else {
            }
        """) == {"x": 1.0, "y": 2.0}

    def test_fresh_frame_per_iteration(self):
        """let inside a loop body does not clash across iterations."""
        assert run_source("""
            let i = 0;
            let total = 0;
            while (i < 4) {
                let sq = i * i;
                total = total + sq;
                i = i + 1;
            }
        """) == {"i": 4.0, "total": 14.0}

    def test_loop_condition_rechecked(self):
        """A test that turns non-boolean fails on re-evaluation."""
        program = parse_program("""
            let c = true;
            let n = 0;
            while (c) { n = n + 1; c = 1; }
        """)
        with pytest.raises(NonBooleanCondition) as exc_info:
            run(program)
        assert unwrap_bindings(exc_info.value.state) == {"c": 1.0, "n": 1.0}

    def test_failure_state_snapshot(self):
        """Errors carry the root bindings at failure time."""
        program = parse_program("let a = 1; let b = 2; let c = a / 0; let d = 4;")
        with pytest.raises(DivisionByZero) as exc_info:
            run(program)
        assert unwrap_bindings(exc_info.value.state) == {"a": 1.0, "b": 2.0}

    def test_failure_inside_block_reports_root(self):
        """Only root bindings are reported, not block locals."""
        program = parse_program("let a = 1; if (true) { let b = 2; a = 5; x = 1; }")
        with pytest.raises(AssignmentToUndeclared) as exc_info:
            run(program)
        assert unwrap_bindings(exc_info.value.state) == {"a": 5.0}

    def test_runs_are_isolated(self):
        """Running a program twice gives the same result."""
        program = parse_program("let x = 1; while (x < 100) { x = x * 2; }")
        assert run(program) == run(program)
        assert unwrap_bindings(run(program)) == {"x": 128.0}

    def test_print_order(self):
        """Prints arrive in program order."""
        seen = []
        run(parse_program("let i = 0; while (i < 3) { print(i); i = i + 1; } print(true);"),
            output=seen.append)
        assert [format_value(v) for v in seen] == ["0", "1", "2", "true"]

    def test_empty_program(self):
        """An empty program has an empty state."""
        assert run([]) == {}

    def test_boolean_state(self):
        """Booleans stay booleans in the final state."""
        state = run_source("let ok = 1 < 2;")
        assert state["ok"] is True


# --- Function Tests ---

class TestFunctions:
    """Test function values, calls and returns."""

    def test_simple_call(self):
        """Call returns the value of its return statement."""
        assert run_source("""
            let add = function(a, b) { return a + b; };
            let r = add(2, 3);
        """)["r"] == 5.0

    def test_recursion(self):
        """Functions can call themselves through the captured frame."""
        assert run_source("""
            let fact = function(n) {
                if (n < 2) { return 1; } else { return n * fact(n - 1); }
            };
            let r = fact(5);
        """)["r"] == 120.0

    def test_deep_recursion_is_reported(self):
        """Exhausting the Python stack fails the run with E411."""
        result = compile_and_run("""
            let f = function(n) {
                if (n === 0) { return 0; } else { return 1 + f(n - 1); }
            };
            let r = f(5000);
        """)
        assert not result.success
        assert isinstance(result.error, RecursionLimitExceeded)
        assert result.error.code == "E411"
        assert "f" in result.state
        assert "r" not in result.state

    def test_deep_recursion_raises_from_run(self):
        """run() raises RecursionLimitExceeded with the root state attached."""
        program = parse_program(
            "let g = function(n) { return g(n + 1); }; let x = 1; let r = g(0);"
        )
        with pytest.raises(RecursionLimitExceeded) as info:
            run(program)
        assert isinstance(info.value, InterpreterError)
        assert unwrap_bindings(info.value.state)["x"] == 1.0

    def test_long_expression_is_reported(self):
        """A very long left-nested sum fails cleanly instead of crashing."""
        source = "let r = " + " + ".join(["1"] * 5000) + ";"
        result = compile_and_run(source)
        assert not result.success
        assert isinstance(result.error, RecursionLimitExceeded)
        assert result.state == {}

    def test_closure_captures_frame(self):
        """Inner functions see the enclosing call's parameters."""
        assert run_source("""
            let make = function(a, b) { return function() { return a + b; }; };
            let f = make(1, 2);
            let r = f();
        """)["r"] == 3.0

    def test_closure_shares_state(self):
        """A closure mutates the binding it captured."""
        assert run_source("""
            let counter = function() {
                let n = 0;
                return function() { n = n + 1; return n; };
            };
            let next = counter();
            next();
            next();
            let r = next();
        """)["r"] == 3.0

    def test_return_from_loop(self):
        """return unwinds through while and if."""
        assert run_source("""
            let first_over = function(limit) {
                let i = 0;
                while (true) {
                    if (i > limit) { return i; }
                    i = i + 1;
                }
            };
            let r = first_over(4);
        """)["r"] == 5.0

    def test_call_statement_discards_result(self):
        """A call used as a statement may finish without return."""
        seen = []
        run(parse_program("""
            let say = function(x) { print(x); };
            say(7);
        """), output=seen.append)
        assert seen == [number_val(7)]

    def test_missing_return_value(self):
        """A call used as a value must return."""
        with pytest.raises(MissingReturnValue):
            run_source("""
                let f = function() { let a = 1; };
                let r = f();
            """)

    def test_not_callable(self):
        """Calling a number fails."""
        with pytest.raises(NotCallable) as exc_info:
            run_source("let f = 1; f();")
        assert exc_info.value.kind == "number"

    def test_undefined_function(self):
        """Calling an unbound name fails."""
        with pytest.raises(UndefinedVariable):
            run_source("g(1);")

    def test_arity_mismatch(self):
        """Argument count must match."""
        with pytest.raises(ArityMismatch) as exc_info:
            run_source("let f = function(a) { return a; }; f(1, 2);")
        assert exc_info.value.expected == 1
        assert exc_info.value.got == 2

    def test_parameters_are_local(self):
        """Parameters do not leak into the caller."""
        state = run_source("""
            let f = function(a) { return a; };
            let r = f(1);
        """)
        assert "a" not in state

    def test_return_at_top_level(self):
        """return outside any function fails."""
        with pytest.raises(ReturnOutsideFunction):
            run_source("return 1;")

    def test_arguments_left_to_right(self):
        """Arguments are evaluated in order."""
        seen = []
        run(parse_program("""
            let show = function(x) { print(x); return x; };
            let pair = function(a, b) { return a - b; };
            let r = pair(show(1), show(2));
        """), output=seen.append)
        assert [format_value(v) for v in seen] == ["1", "2"]

    def test_function_equality(self):
        """A function equals itself only."""
        state = run_source("""
            let f = function() { return 1; };
            let g = function() { return 1; };
            let same = f === f;
            let different = f === g;
        """)
        assert state["same"] is True
        assert state["different"] is False


# --- High-level API Tests ---

class TestExecutionResult:
    """Test the execute/compile_and_run API."""

    def test_successful_run(self):
        """Successful runs report state and prints."""
        result = compile_and_run("let x = 2; print(x * 3);")
        assert isinstance(result, ExecutionResult)
        assert result.success
        assert result.bindings == {"x": 2.0}
        assert result.output_lines == ["6"]
        assert result.error is None

    def test_runtime_failure(self):
        """Runtime errors are reported, not raised."""
        result = compile_and_run("let x = 1; print(x); let y = x / 0;")
        assert not result.success
        assert isinstance(result.error, DivisionByZero)
        assert result.error_message == "division by zero"
        assert result.bindings == {"x": 1.0}
        assert result.output_lines == ["1"]

    def test_parser_failure(self):
        """Parse errors are reported with a prefix."""
        result = compile_and_run("let x = ;")
        assert not result.success
        assert result.error_message.startswith("Parser error:")

    def test_lexer_failure(self):
        """Lexer errors are reported with a prefix."""
        result = compile_and_run("let x = $;")
        assert not result.success
        assert result.error_message.startswith("Lexer error:")

    def test_execute_ast(self):
        """execute() runs an already built program."""
        program = [
            Let("x", NumberLiteral(1.0)),
            ExpressionStatement(BinaryOp(BinaryOperator.ADD, Variable("x"), NumberLiteral(1.0))),
        ]
        result = execute(program)
        assert result.success
        assert result.bindings == {"x": 1.0}

    def test_interpreter_output_sink(self):
        """Interpreter forwards prints to its output callable."""
        seen = []
        Interpreter(output=seen.append).run(parse_program("print(false);"))
        assert seen == [bool_val(False)]

    def test_unknown_node_reported(self):
        """Unknown statements inside a program fail the run."""
        result = execute([Let("x", NumberLiteral(1.0)), object()])
        assert not result.success
        assert isinstance(result.error, UnknownStatement)
        assert result.bindings == {"x": 1.0}

    def test_call_node_in_expression(self):
        """Call nodes can be built by hand."""
        program = [
            Let("id", parse_expression("function(v) { return v; }")),
            Let("r", Call("id", [NumberLiteral(4.0)])),
        ]
        assert execute(program).bindings["r"] == 4.0


# --- Logging Tests ---

class TestLogging:
    """Test the interpreter's debug records."""

    SOURCE = "let f = function(a) { return a; }; let x = f(2); print(x);"

    def test_debug_records(self, caplog):
        """Declarations, calls, prints and frames are logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="treelang.runtime")
        assert compile_and_run(self.SOURCE).success
        messages = [r.getMessage() for r in caplog.records]
        assert "let x = 2" in messages
        assert "call f(2)" in messages
        assert "print 2" in messages
        assert "enter frame 'call:f' (depth 1)" in messages

    def test_values_not_formatted_above_debug(self, caplog, monkeypatch):
        """Values are only formatted for logging when DEBUG is enabled."""
        formatted = []

        def recording_format(value):
            formatted.append(value)
            return format_value(value)

        monkeypatch.setattr(interpreter_module, "format_value", recording_format)
        caplog.set_level(logging.INFO, logger="treelang.runtime")
        assert compile_and_run(self.SOURCE).success
        assert formatted == []
        assert not any(r.levelno == logging.DEBUG for r in caplog.records)
