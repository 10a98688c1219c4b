"""Runtime values of lamb.

Values are plain Python objects wherever Python already has the right type:

- Integer: int
- Float: float
- String: str
- Boolean: bool (only ever produced by the comparison built-ins and not; there is no boolean syntax)
- Closure: Closure, below
- built-in procedure: Builtin, below
"""

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class Closure:
    """Single-parameter procedure: a parameter name, an unevaluated body, and the environment at creation time."""
    parameter: str
    body: Any = field(repr=False)         # Expr
    environment: Any = field(repr=False)  # Environment

    def __str__(self):
        return f"#<procedure:{self.parameter}>"


@dataclass(frozen=True)
class Builtin:
    """One of the fixed built-in procedures. apply takes the list of operand values."""
    name: str
    apply: Callable = field(repr=False, compare=False)

    def __str__(self):
        return f"#<builtin:{self.name}>"


def is_number(value):
    """Integers and floats are numbers, booleans are not."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def show(value):
    """Renders value the way the shell prints it."""
    if isinstance(value, bool):
        return "#t" if value else "#f"
    elif isinstance(value, str):
        return f'"{value}"'
    elif isinstance(value, int):
        try:
            return str(value)
        except ValueError:  # too many digits for str(): print it as a hex literal
            return f"#x{value:x}"
    return str(value)
