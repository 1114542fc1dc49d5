"""
Checked fixed-width integer arithmetic.

Python ints never wrap, so "overflow" here means leaving the unsigned 64-bit
(quantities) or 128-bit (widened intermediates) domain. Every helper raises
instead of truncating:
- `OverflowError` when a result leaves its domain,
- `ZeroDivisionError` for a zero divisor,
- `TypeError` for non-int operands (bools are rejected).
"""

from __future__ import annotations


U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_range(name: str, value: int, upper: int) -> None:
    if value < 0 or value > upper:
        raise OverflowError(f"{name} out of range [0, {upper}]: {value}")


def is_u64(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def to_u64(value: int, *, name: str = "value") -> int:
    """Narrow a widened intermediate back to u64 (never truncates)."""
    _require_int(name, value)
    _require_range(name, value, U64_MAX)
    return value


def checked_add_u64(a: int, b: int) -> int:
    _require_int("a", a)
    _require_int("b", b)
    _require_range("a", a, U64_MAX)
    _require_range("b", b, U64_MAX)
    total = a + b
    if total > U64_MAX:
        raise OverflowError(f"u64 addition overflow: {a} + {b}")
    return total


def checked_sub_u64(a: int, b: int) -> int:
    _require_int("a", a)
    _require_int("b", b)
    _require_range("a", a, U64_MAX)
    _require_range("b", b, U64_MAX)
    if b > a:
        raise OverflowError(f"u64 subtraction underflow: {a} - {b}")
    return a - b


def checked_add_u128(a: int, b: int) -> int:
    _require_int("a", a)
    _require_int("b", b)
    _require_range("a", a, U128_MAX)
    _require_range("b", b, U128_MAX)
    total = a + b
    if total > U128_MAX:
        raise OverflowError(f"u128 addition overflow: {a} + {b}")
    return total


def checked_mul_u128(a: int, b: int) -> int:
    _require_int("a", a)
    _require_int("b", b)
    _require_range("a", a, U128_MAX)
    _require_range("b", b, U128_MAX)
    product = a * b
    if product > U128_MAX:
        raise OverflowError(f"u128 multiplication overflow: {a} * {b}")
    return product


def checked_div(numerator: int, denominator: int) -> int:
    """Floor division of non-negative ints; a zero denominator raises ZeroDivisionError."""
    _require_int("numerator", numerator)
    _require_int("denominator", denominator)
    if numerator < 0 or denominator < 0:
        raise ValueError("checked_div operands must be non-negative")
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    return numerator // denominator


def integer_sqrt(value: int) -> int:
    """
    floor(sqrt(value)) via the Babylonian (Newton) iteration.

    Starts from x0 = value, y0 = (value + 1) // 2 and iterates
    y = (x + value // x) // 2 while y < x. Converges in O(log value) steps.
    """
    _require_int("value", value)
    _require_range("value", value, U128_MAX)
    if value == 0:
        return 0
    x = value
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + value // x) // 2
    return x
