"""
Execution context for the treelang interpreter.

Manages the chain of scope frames, collects printed output, and carries the
return signal used to unwind function bodies.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from contextlib import contextmanager

from .values import Value

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Frame:
    """
    A single scope frame containing variable bindings.

    Frames form a chain via the `parent` field for lexical scoping. Names are
    unique within one frame; an inner frame may shadow an outer one.
    """
    variables: Dict[str, Value] = field(default_factory=dict)
    parent: Optional["Frame"] = field(default=None, repr=False)
    name: str = "anonymous"  # For debugging

    def get(self, name: str) -> Optional[Value]:
        """Look up a variable in this frame or parent frames."""
        frame = self.find(name)
        if frame is None:
            return None
        return frame.variables[name]

    def find(self, name: str) -> Optional["Frame"]:
        """Return the innermost frame that binds `name`, or None."""
        frame = self
        while frame is not None:
            if name in frame.variables:
                return frame
            frame = frame.parent
        return None

    def has_local(self, name: str) -> bool:
        """Check if `name` is bound in this frame (parents are not checked)."""
        return name in self.variables

    def set(self, name: str, value: Value) -> None:
        """Set a variable in this frame (shadowing parent if exists)."""
        self.variables[name] = value

    def child(self, name: str = "block") -> "Frame":
        return Frame(parent=self, name=name)

    def snapshot(self) -> Dict[str, Value]:
        """Copy of this frame's own bindings."""
        return dict(self.variables)

    @property
    def depth(self) -> int:
        depth = 0
        frame = self.parent
        while frame is not None:
            depth += 1
            frame = frame.parent
        return depth


OutputSink = Callable[[Value], None]


@dataclass
class ExecutionContext:
    """
    The full execution context for interpreting a program.

    Tracks:
    - The current frame of the scope chain
    - Printed values, in program order
    - The return signal and the number of active calls
    """
    # Scope chain
    current_frame: Frame = field(default_factory=lambda: Frame(name="global"))

    # Output
    printed: List[Value] = field(default_factory=list)
    output: Optional[OutputSink] = None

    # Control flow
    call_depth: int = 0
    _should_return: bool = False
    _return_value: Optional[Value] = None

    def get_variable(self, name: str) -> Optional[Value]:
        """Look up a variable in the current scope chain."""
        return self.current_frame.get(name)

    def set_variable(self, name: str, value: Value) -> None:
        """Define a new variable in the current frame."""
        self.current_frame.set(name, value)

    @contextmanager
    def new_scope(self, name: str = "block"):
        """
        Context manager to create a new nested frame.

        Usage:
            with ctx.new_scope("while-body"):
                # variables defined here are local to this frame
                ctx.set_variable("i", number_val(0))
        """
        with self.enter_frame(self.current_frame.child(name)) as frame:
            yield frame

    @contextmanager
    def enter_frame(self, frame: Frame):
        """Make `frame` current for the duration of the block."""
        old_frame = self.current_frame
        self.current_frame = frame
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("enter frame %r (depth %d)", frame.name, frame.depth)
        try:
            yield frame
        finally:
            self.current_frame = old_frame

    def emit(self, value: Value) -> None:
        """Record a printed value and forward it to the output sink."""
        self.printed.append(value)
        if self.output is not None:
            self.output(value)

    def signal_return(self, value: Value) -> None:
        """Signal a return from the innermost function call."""
        self._should_return = True
        self._return_value = value

    @property
    def should_return(self) -> bool:
        """Check if a return was signaled."""
        return self._should_return

    @property
    def return_value(self) -> Optional[Value]:
        """Get the return value if a return was signaled."""
        return self._return_value

    def clear_return(self) -> None:
        """Clear the return signal (used after handling return)."""
        self._should_return = False
        self._return_value = None


def create_context(
    frame: Optional[Frame] = None,
    output: Optional[OutputSink] = None,
) -> ExecutionContext:
    """
    Create a new execution context.

    Args:
        frame: Frame to start in (a fresh root frame if omitted)
        output: Optional callable receiving each printed value

    Returns:
        ExecutionContext ready for execution
    """
    if frame is None:
        frame = Frame(name="global")
    return ExecutionContext(current_frame=frame, output=output)
