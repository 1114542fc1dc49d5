"""
Constant Product Market Maker (CPMM) quantities.

This module wraps the integer kernels and maps their built-in exceptions onto
the AMM error taxonomy: any overflow or zero divisor becomes `MathOverflow`.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap, O(log n) per bootstrap mint (integer sqrt)
- Invariant: after each swap, x' * y' >= x * y
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from ..config import AmmConfig
from ..kernels.python import checked_math
from ..kernels.python.cpmm_swap import SwapExactInResult
from ..kernels.python.cpmm_swap import swap_exact_in as _kernel_swap_exact_in
from ..kernels.python.lp_math import burn_liquidity as _kernel_burn_liquidity
from ..kernels.python.lp_math import mint_liquidity as _kernel_mint_liquidity
from ..state.accounts import Amount
from .errors import InvalidAmount, MathOverflow


@contextmanager
def overflow_guard() -> Iterator[None]:
    try:
        yield
    except (OverflowError, ZeroDivisionError) as exc:
        raise MathOverflow(str(exc)) from exc


def require_u64(name: str, value: int) -> int:
    """Caller-supplied quantities are u64; anything else is an invalid amount."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not checked_math.is_u64(value):
        raise InvalidAmount(f"{name} out of u64 range: {value}")
    return value


def compute_lp_mint(
    *,
    reserve_a: Amount,
    reserve_b: Amount,
    lp_supply: Amount,
    total_lp: Amount,
    amount_a: Amount,
    amount_b: Amount,
) -> Amount:
    """
    Claim tokens minted for a deposit.

    For the first deposit (total_lp == 0):
        lp = floor(sqrt(amount_a * amount_b))

    For subsequent deposits:
        lp = min(floor(amount_a * lp_supply / reserve_a), floor(amount_b * lp_supply / reserve_b))

    The worse of the two ratios prices an imbalanced deposit; the excess is not refunded.

    Raises:
        MathOverflow: if an intermediate or the result leaves its domain, or a reserve is zero
    """
    with overflow_guard():
        res = _kernel_mint_liquidity(
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            total_supply=lp_supply,
            amount_a=amount_a,
            amount_b=amount_b,
            bootstrap=total_lp == 0,
        )
    return res.liquidity_minted


def compute_lp_burn(
    *,
    lp_amount: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    lp_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Asset amounts returned for burning `lp_amount` claim tokens.

    Formula:
        amount_a = floor(reserve_a * lp_amount / lp_supply)
        amount_b = floor(reserve_b * lp_amount / lp_supply)
    """
    if lp_amount > lp_supply:
        raise InvalidAmount(f"cannot burn more LP than supply: {lp_amount} > {lp_supply}")
    with overflow_guard():
        res = _kernel_burn_liquidity(
            lp_amount=lp_amount,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            total_supply=lp_supply,
        )
    return res.amount_a_out, res.amount_b_out


def swap_exact_in(
    config: AmmConfig,
    *,
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
) -> SwapExactInResult:
    """
    Exact-in swap quote against pre-swap reserves.

        in_after_fee = floor(amount_in * 997 / 1000)
        amount_out = floor(reserve_out * in_after_fee / (reserve_in + in_after_fee))
    """
    with overflow_guard():
        return _kernel_swap_exact_in(
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            amount_in=amount_in,
            fee_numerator=config.fee_numerator,
            fee_denominator=config.fee_denominator,
        )


def increase_total_lp(total_lp: Amount, minted: Amount) -> Amount:
    with overflow_guard():
        return checked_math.checked_add_u64(total_lp, minted)


def decrease_total_lp(total_lp: Amount, burned: Amount) -> Amount:
    with overflow_guard():
        return checked_math.checked_sub_u64(total_lp, burned)
