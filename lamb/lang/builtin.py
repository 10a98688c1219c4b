"""The nine built-in procedures of lamb. Built-in names are resolved before the environment is consulted, so they can
never be shadowed by a binding.

- `+ - * /`: two or more numbers, folded left to right. Mixing integers and floats gives a float.
- `string-append`: two or more strings, concatenated in order.
- `= <`: two or more numbers, compared pairwise along the chain.
- `string=? string<?`: two or more strings, compared pairwise along the chain.
- `not`: exactly one boolean.
"""

from functools import reduce
import operator

from lamb.lang.error import ArityOrTypeError
from lamb.lang.value import Builtin, is_number, show


def _check(name, operands, minimum, accepts, kind, maximum=None):
    """Raises ArityOrTypeError unless operands has the right length and every operand passes accepts."""
    if len(operands) < minimum or (maximum is not None and len(operands) > maximum):
        expected = f"{minimum}" if maximum == minimum else f"at least {minimum}"
        raise ArityOrTypeError(name, "expects {} operand(s), got {}", expected, str(len(operands)))

    for operand in operands:
        if not accepts(operand):
            raise ArityOrTypeError(name, "expects {}, got '{}'", kind, show(operand))


def _divide(left, right):
    """Exact when both are integers and the division has no remainder, floating-point otherwise."""
    if right == 0:
        raise ArityOrTypeError("/", "cannot divide '{}' by zero", show(left))
    if isinstance(left, int) and isinstance(right, int) and left % right == 0:
        return left // right
    return left / right


def arithmetic(name, op):
    def apply(operands):
        _check(name, operands, 2, is_number, "numbers")
        try:
            return reduce(op, operands)
        except OverflowError:  # also raised by _divide
            raise ArityOrTypeError(name, "result is too large for a float") from None
    return Builtin(name, apply)


def comparison(name, op, accepts, kind):
    def apply(operands):
        _check(name, operands, 2, accepts, kind)
        return all(op(left, right) for left, right in zip(operands, operands[1:]))
    return Builtin(name, apply)


def string_append(operands):
    _check("string-append", operands, 2, lambda operand: isinstance(operand, str), "strings")
    return "".join(operands)


def not_(operands):
    _check("not", operands, 1, lambda operand: isinstance(operand, bool), "a boolean", maximum=1)
    return not operands[0]


def _is_string(value):
    return isinstance(value, str)


BUILTINS = {builtin.name: builtin for builtin in [
    arithmetic("+", operator.add),
    arithmetic("-", operator.sub),
    arithmetic("*", operator.mul),
    arithmetic("/", _divide),
    Builtin("string-append", string_append),
    comparison("string<?", operator.lt, _is_string, "strings"),
    comparison("string=?", operator.eq, _is_string, "strings"),
    Builtin("not", not_),
    comparison("=", operator.eq, is_number, "numbers"),
    comparison("<", operator.lt, is_number, "numbers"),
]}
