"""
CPMM swap kernel (fixed proportional fee).

Semantics:
- The fee is taken from the input: `in_after_fee = floor(amount_in * fee_numerator / fee_denominator)`
  (997/1000 by default, i.e. 0.3%). The whole fee stays in the pool.
- Pricing: `x_new = x + in_after_fee`, `k = x * y`, `y_new = ceil(k / x_new)`,
  `amount_out = y - y_new`, equivalently `floor(y * in_after_fee / x_new)`.

Rounding `y_new` up keeps every rounding remainder in the pool, so
`(x + amount_in) * (y - amount_out) >= x * y` holds for every accepted swap.

All intermediates are computed in the u128 domain and narrowed back to u64.
"""

from __future__ import annotations

from dataclasses import dataclass

from .checked_math import (
    checked_add_u128,
    checked_add_u64,
    checked_div,
    checked_mul_u128,
    to_u64,
)


FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _ceil_div_nonneg(numerator: int, denominator: int) -> int:
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    quotient = checked_div(numerator, denominator)
    if quotient * denominator != numerator:
        quotient += 1
    return quotient


def validate_fee(fee_numerator: int, fee_denominator: int) -> None:
    _require_int("fee_numerator", fee_numerator)
    _require_int("fee_denominator", fee_denominator)
    if fee_denominator <= 0:
        raise ValueError("fee_denominator must be positive")
    if not (0 < fee_numerator <= fee_denominator):
        raise ValueError("fee_numerator must be in (0, fee_denominator]")


@dataclass(frozen=True)
class SwapExactInResult:
    amount_in: int
    amount_in_after_fee: int
    fee: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def amount_in_after_fee(amount_in: int, *, fee_numerator: int = FEE_NUMERATOR, fee_denominator: int = FEE_DENOMINATOR) -> int:
    """`floor(amount_in * fee_numerator / fee_denominator)` in the u128 domain."""
    validate_fee(fee_numerator, fee_denominator)
    to_u64(amount_in, name="amount_in")
    return checked_div(checked_mul_u128(amount_in, fee_numerator), fee_denominator)


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises OverflowError if any quantity leaves its domain and ZeroDivisionError
    when the post-fee input reserve is zero (empty input reserve and a dust trade).
    A zero `amount_out` is returned as-is; policy on it belongs to the caller.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
    ):
        _require_int(name, v)
        to_u64(v, name=name)

    x = reserve_in
    y = reserve_out
    x_in = amount_in_after_fee(amount_in, fee_numerator=fee_numerator, fee_denominator=fee_denominator)

    x_new = checked_add_u128(x, x_in)
    k_before = checked_mul_u128(x, y)
    y_new = _ceil_div_nonneg(k_before, x_new)
    if y_new > y:
        raise AssertionError("y_new exceeds reserve_out")
    amount_out = to_u64(y - y_new, name="amount_out")

    new_reserve_in = checked_add_u64(reserve_in, amount_in)
    new_reserve_out = reserve_out - amount_out
    k_after = checked_mul_u128(new_reserve_in, new_reserve_out)
    if k_after < k_before:
        raise AssertionError(f"Invariant violation: new_k ({k_after}) < old_k ({k_before})")

    return SwapExactInResult(
        amount_in=amount_in,
        amount_in_after_fee=x_in,
        fee=amount_in - x_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
