"""
Liquidity math kernel.

Bootstrap mint (empty pool):
    lp = floor(sqrt(amount_a * amount_b))
Subsequent mint:
    lp = min(floor(amount_a * supply / reserve_a), floor(amount_b * supply / reserve_b))
Burn:
    amount_x = floor(reserve_x * lp_amount / supply)

Products are formed in the u128 domain; results are narrowed to u64 and a value
that does not fit raises OverflowError rather than being truncated. There is no
minimum-liquidity lock and no refund of the imbalanced side of a deposit.
"""

from __future__ import annotations

from dataclasses import dataclass

from .checked_math import checked_div, checked_mul_u128, integer_sqrt, to_u64


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class MintLiquidityResult:
    liquidity_minted: int
    lp_from_a: int
    lp_from_b: int
    bootstrap: bool


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount_a_out: int
    amount_b_out: int


def mint_liquidity_initial(*, amount_a: int, amount_b: int) -> int:
    """Bootstrap mint: `floor(sqrt(amount_a * amount_b))`."""
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    to_u64(amount_a, name="amount_a")
    to_u64(amount_b, name="amount_b")
    product = checked_mul_u128(amount_a, amount_b)
    return to_u64(integer_sqrt(product), name="liquidity_minted")


def mint_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    amount_a: int,
    amount_b: int,
    bootstrap: bool,
) -> MintLiquidityResult:
    """
    Compute claim tokens for a deposit of `(amount_a, amount_b)`.

    `bootstrap` selects the empty-pool formula; it is decided by the caller from
    the pool record's tracked supply. A zero result is returned as-is.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_supply", total_supply),
        ("amount_a", amount_a),
        ("amount_b", amount_b),
    ):
        _require_int(name, v)
        to_u64(v, name=name)

    if bootstrap:
        minted = mint_liquidity_initial(amount_a=amount_a, amount_b=amount_b)
        return MintLiquidityResult(
            liquidity_minted=minted,
            lp_from_a=minted,
            lp_from_b=minted,
            bootstrap=True,
        )

    lp_a = to_u64(checked_div(checked_mul_u128(amount_a, total_supply), reserve_a), name="lp_from_a")
    lp_b = to_u64(checked_div(checked_mul_u128(amount_b, total_supply), reserve_b), name="lp_from_b")

    return MintLiquidityResult(
        liquidity_minted=min(lp_a, lp_b),
        lp_from_a=lp_a,
        lp_from_b=lp_b,
        bootstrap=False,
    )


def burn_liquidity(*, lp_amount: int, reserve_a: int, reserve_b: int, total_supply: int) -> BurnLiquidityResult:
    """
    Burn claim tokens for underlying assets (floor rounding).
    """
    for name, v in (
        ("lp_amount", lp_amount),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_supply", total_supply),
    ):
        _require_int(name, v)
        to_u64(v, name=name)

    if lp_amount > total_supply:
        raise ValueError("cannot burn more than total_supply")

    amount_a_out = to_u64(checked_div(checked_mul_u128(reserve_a, lp_amount), total_supply), name="amount_a_out")
    amount_b_out = to_u64(checked_div(checked_mul_u128(reserve_b, lp_amount), total_supply), name="amount_b_out")
    if amount_a_out > reserve_a or amount_b_out > reserve_b:
        raise AssertionError("burn outputs exceed reserves")
    return BurnLiquidityResult(amount_a_out=amount_a_out, amount_b_out=amount_b_out)
