"""
treelang runtime.

Tree-walking evaluation of treelang programs:
- values: runtime value wrappers and formatting
- context: scope frames and execution state
- interpreter: the Interpreter and the program-level API
- evaluator: frame-level evaluate/execute/run
"""

from .values import (
    Value,
    ValueKind,
    Closure,
    number_val,
    bool_val,
    function_val,
    wrap_value,
    unwrap_value,
    unwrap_bindings,
    format_value,
    to_plain,
)

from .context import (
    Frame,
    ExecutionContext,
    create_context,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    execute,
    compile_and_run,
)

from .evaluator import (
    evaluate,
    run,
)
from .evaluator import execute as execute_statement

__all__ = [
    # Values
    'Value',
    'ValueKind',
    'Closure',
    'number_val',
    'bool_val',
    'function_val',
    'wrap_value',
    'unwrap_value',
    'unwrap_bindings',
    'format_value',
    'to_plain',
    # Context
    'Frame',
    'ExecutionContext',
    'create_context',
    # Interpreter
    'Interpreter',
    'ExecutionResult',
    'execute',
    'compile_and_run',
    # Frame-level API
    'evaluate',
    'execute_statement',
    'run',
]
