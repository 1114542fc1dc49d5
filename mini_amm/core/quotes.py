"""
Read-only pool queries and quotes.

Quotes run the same kernels and validations as the mutating operations against
the current reserves, without touching custody.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..config import AmmConfig
from ..custody.interface import Ledger
from ..kernels.python import checked_math
from ..state.accounts import Address, Amount, AssetId
from .accounts import PoolAccounts
from .cpmm import compute_lp_burn, compute_lp_mint, overflow_guard, require_u64, swap_exact_in
from .errors import InvalidAmount, InvalidTokenMint, ZeroLiquidityInput, ZeroLpMint
from .swap import SwapDirection
from .validation import load_bound_pool


BPS_DENOMINATOR = 10_000


@dataclass(frozen=True)
class PoolInfo:
    pool: Address
    token_a_mint: AssetId
    token_b_mint: AssetId
    lp_mint: Address
    reserve_a: Amount
    reserve_b: Amount
    total_lp: Amount
    lp_supply: Amount
    k: int


@dataclass(frozen=True)
class SwapQuote:
    direction: SwapDirection
    amount_in: Amount
    amount_out: Amount
    fee: Amount


def get_pool_info(ledger: Ledger, config: AmmConfig, accounts: PoolAccounts) -> PoolInfo:
    pool = load_bound_pool(ledger, ledger, config, accounts)
    with overflow_guard():
        k = checked_math.checked_mul_u128(pool.reserve_a, pool.reserve_b)
    return PoolInfo(
        pool=pool.address,
        token_a_mint=pool.mint_a.address,
        token_b_mint=pool.mint_b.address,
        lp_mint=pool.lp_mint.address,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_lp=pool.state.total_lp,
        lp_supply=pool.lp_mint.supply,
        k=k,
    )


def quote_swap(
    ledger: Ledger,
    config: AmmConfig,
    accounts: PoolAccounts,
    mint_in: AssetId,
    amount_in: Amount,
) -> SwapQuote:
    """
    Expected output of selling `amount_in` of `mint_in` into the pool now.

    Raises the same errors the swap itself would for these inputs.
    """
    require_u64("amount_in", amount_in)
    if amount_in == 0:
        raise InvalidAmount("amount_in must be positive")
    pool = load_bound_pool(ledger, ledger, config, accounts)
    if mint_in == pool.mint_a.address:
        direction = SwapDirection.A_TO_B
        reserve_in, reserve_out = pool.reserve_a, pool.reserve_b
    elif mint_in == pool.mint_b.address:
        direction = SwapDirection.B_TO_A
        reserve_in, reserve_out = pool.reserve_b, pool.reserve_a
    else:
        raise InvalidTokenMint(f"pool does not trade {mint_in}")

    res = swap_exact_in(config, reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in)
    if res.amount_out == 0:
        raise InvalidAmount(f"amount_in {amount_in} is too small to pay out anything")
    return SwapQuote(direction=direction, amount_in=amount_in, amount_out=res.amount_out, fee=res.fee)


def quote_add_liquidity(
    ledger: Ledger,
    config: AmmConfig,
    accounts: PoolAccounts,
    amount_a: Amount,
    amount_b: Amount,
) -> Amount:
    """Claim tokens a deposit of `(amount_a, amount_b)` would mint now."""
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)
    if amount_a == 0 or amount_b == 0:
        raise ZeroLiquidityInput(f"({amount_a}, {amount_b})")
    pool = load_bound_pool(ledger, ledger, config, accounts)
    lp = compute_lp_mint(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=pool.lp_mint.supply,
        total_lp=pool.state.total_lp,
        amount_a=amount_a,
        amount_b=amount_b,
    )
    if lp == 0:
        raise ZeroLpMint(f"deposit ({amount_a}, {amount_b}) mints nothing")
    return lp


def quote_remove_liquidity(
    ledger: Ledger,
    config: AmmConfig,
    accounts: PoolAccounts,
    lp_burn: Amount,
) -> Tuple[Amount, Amount]:
    """Assets `(amount_a, amount_b)` that burning `lp_burn` would pay out now."""
    require_u64("lp_burn", lp_burn)
    if lp_burn == 0:
        raise InvalidAmount("lp_burn must be positive")
    pool = load_bound_pool(ledger, ledger, config, accounts)
    return compute_lp_burn(
        lp_amount=lp_burn,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=pool.lp_mint.supply,
    )


def min_amount_out(amount_out: Amount, slippage_bps: int) -> Amount:
    """
    Slippage floor for a quoted output:
        floor(amount_out * (10000 - slippage_bps) / 10000)
    """
    require_u64("amount_out", amount_out)
    if not isinstance(slippage_bps, int) or isinstance(slippage_bps, bool):
        raise TypeError("slippage_bps must be an int")
    if not (0 <= slippage_bps <= BPS_DENOMINATOR):
        raise ValueError(f"slippage_bps must be in [0, {BPS_DENOMINATOR}]: {slippage_bps}")
    return amount_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR
