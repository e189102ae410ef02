"""
Runtime value wrappers for the treelang interpreter.

Values wrap Python objects with a kind tag so that every operator can check
its operands before touching the data. Numbers are always floats and booleans
are always bools; there is no implicit conversion between kinds.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..ast import Statement
    from .context import Frame


class ValueKind(Enum):
    """The kinds a runtime value can have."""
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Closure:
    """
    A function value: parameter names, body, and the frame it was created in.

    Closures compare by identity. The captured frame may in turn hold the
    closure (recursive functions), so it is left out of the repr.
    """
    parameters: List[str]
    body: List["Statement"] = field(repr=False)
    frame: "Frame" = field(repr=False)
    name: Optional[str] = None


@dataclass
class Value:
    """
    A runtime value with its kind.

    The `data` field holds the Python object (float, bool or Closure).
    The `kind` field holds the ValueKind used for runtime checks.
    """
    data: Any
    kind: ValueKind

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.kind})"

    @property
    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER

    @property
    def is_boolean(self) -> bool:
        return self.kind == ValueKind.BOOLEAN

    @property
    def is_function(self) -> bool:
        return self.kind == ValueKind.FUNCTION

    def strict_equals(self, other: "Value") -> bool:
        """Equality of kind and value; functions are equal only to themselves."""
        if self.kind != other.kind:
            return False
        if self.kind == ValueKind.FUNCTION:
            return self.data is other.data
        return self.data == other.data


# Convenience constructors

def number_val(x: float) -> Value:
    """Create a number value."""
    return Value(float(x), ValueKind.NUMBER)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), ValueKind.BOOLEAN)


def function_val(closure: Closure) -> Value:
    """Create a function value."""
    return Value(closure, ValueKind.FUNCTION)


def wrap_value(data: Any) -> Value:
    """Wrap a raw Python float/int, bool or Closure as a Value."""
    if isinstance(data, bool):
        return bool_val(data)
    if isinstance(data, (int, float)):
        return number_val(data)
    if isinstance(data, Closure):
        return function_val(data)
    raise ValueError(f"cannot wrap {type(data).__name__} as a treelang value")


def unwrap_value(v: Value) -> Any:
    """Extract the raw Python data from a Value."""
    return v.data


def unwrap_bindings(bindings: Dict[str, Value]) -> Dict[str, Any]:
    """Extract raw data from a name -> Value mapping."""
    return {name: v.data for name, v in bindings.items()}


def format_number(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == int(x) and abs(x) < 1e21:
        return str(int(x))
    return repr(x)


def format_value(value: Value) -> str:
    """Render a value the way `print` shows it."""
    if value.kind == ValueKind.NUMBER:
        return format_number(value.data)
    if value.kind == ValueKind.BOOLEAN:
        return "true" if value.data else "false"
    if value.kind == ValueKind.FUNCTION:
        return f"<function({', '.join(value.data.parameters)})>"
    return repr(value.data)


def to_plain(value: Value) -> Any:
    """
    Convert a value to a JSON/YAML friendly Python object.

    Finite numbers stay numbers (integral ones become ints), non-finite
    numbers and functions become their printed form.
    """
    if value.kind == ValueKind.BOOLEAN:
        return value.data
    if value.kind == ValueKind.NUMBER:
        x = value.data
        if math.isnan(x) or math.isinf(x):
            return format_number(x)
        if x == int(x):
            return int(x)
        return x
    return format_value(value)
