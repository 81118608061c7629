"""Integer helpers shared by the fee, reward and pricing policies.

All amounts live in the unsigned 64-bit domain ``[0, U64_MAX]``. Products are
formed on Python ints (unbounded), so nothing wraps; results are narrowed back
and checked against ``U64_MAX`` before they leave this module.

Rounding is always floor (Python ``//`` on non-negative operands).
"""

from __future__ import annotations

from ..errors import InvalidParameter, Overflow

U64_MAX: int = (1 << 64) - 1


def require_u64(name: str, value: int) -> int:
    """Return *value* if it is an int in the u64 domain, else raise ``InvalidParameter``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an int")
    if value < 0 or value > U64_MAX:
        raise InvalidParameter(f"{name} must be in [0, {U64_MAX}]: {value}")
    return value


def require_positive_u64(name: str, value: int) -> int:
    require_u64(name, value)
    if value == 0:
        raise InvalidParameter(f"{name} must be positive")
    return value


def narrow_u64(name: str, value: int) -> int:
    """Narrow a widened intermediate back to u64, raising ``Overflow`` if it does not fit."""
    if value < 0 or value > U64_MAX:
        raise Overflow(f"{name} does not fit u64: {value}")
    return value


def mul_div_floor(a: int, b: int, denominator: int, *, name: str = "result") -> int:
    """``floor(a * b / denominator)`` without intermediate overflow."""
    if denominator <= 0:
        raise InvalidParameter("denominator must be positive")
    if a < 0 or b < 0:
        raise InvalidParameter("operands must be non-negative")
    return narrow_u64(name, (a * b) // denominator)


def checked_add(name: str, a: int, b: int) -> int:
    return narrow_u64(name, a + b)


def checked_sub(name: str, a: int, b: int) -> int:
    if b > a:
        raise Overflow(f"{name} would go below zero: {a} - {b}")
    return a - b
