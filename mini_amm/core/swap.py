"""
Swap engine: exact-in trades against the constant-product curve.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..config import AmmConfig
from ..custody.interface import Ledger, UserAuthority
from ..state.accounts import Amount, AssetId
from .accounts import SwapAccounts
from .cpmm import require_u64, swap_exact_in
from .errors import InvalidAmount, InvalidSwapDirection, SlippageExceeded
from .validation import BoundPool, load_bound_pool, require_user_token_account_in


class SwapDirection(Enum):
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


@dataclass(frozen=True)
class SwapExecution:
    direction: SwapDirection
    amount_in: Amount
    amount_out: Amount
    fee: Amount
    reserve_in_after: Amount
    reserve_out_after: Amount
    k_before: int
    k_after: int


def resolve_direction(pool: BoundPool, mint_in: AssetId, mint_out: AssetId) -> SwapDirection:
    """
    Match the presented input asset against the pool's two assets.

    Raises:
        InvalidSwapDirection: if input and output resolve to the same asset
    """
    if mint_in == mint_out:
        raise InvalidSwapDirection(f"both sides hold {mint_in}")
    if mint_in == pool.vault_a.mint:
        return SwapDirection.A_TO_B
    return SwapDirection.B_TO_A


def swap(
    ledger: Ledger,
    config: AmmConfig,
    accounts: SwapAccounts,
    amount_in: Amount,
    min_amount_out: Amount,
) -> SwapExecution:
    """
    Sell `amount_in` of the presented asset for at least `min_amount_out` of the other.

    Reserves are read once, before either transfer. The input is transferred in
    under the caller's authority; the output is paid from the other vault under
    the pool's own signing capability.

    Raises:
        InvalidTokenMint: if either user account holds an asset the pool does not trade
        InvalidTokenOwner: if either user account is not controlled by the caller
        InvalidSwapDirection: if both user accounts hold the same asset
        SlippageExceeded: if amount_out < min_amount_out
        InvalidAmount: if amount_in is zero or the trade would pay out nothing
    """
    require_u64("amount_in", amount_in)
    require_u64("min_amount_out", min_amount_out)
    if amount_in == 0:
        raise InvalidAmount("amount_in must be positive")

    pool = load_bound_pool(ledger, ledger, config, accounts.pool)
    pair = (accounts.pool.token_a_mint, accounts.pool.token_b_mint)
    user_in = require_user_token_account_in(ledger, accounts.user_token_in, mints=pair, user=accounts.user)
    user_out = require_user_token_account_in(ledger, accounts.user_token_out, mints=pair, user=accounts.user)
    direction = resolve_direction(pool, user_in.mint, user_out.mint)

    if direction is SwapDirection.A_TO_B:
        vault_in, vault_out, mint_in, mint_out = pool.vault_a, pool.vault_b, pool.mint_a, pool.mint_b
    else:
        vault_in, vault_out, mint_in, mint_out = pool.vault_b, pool.vault_a, pool.mint_b, pool.mint_a

    quote = swap_exact_in(
        config,
        reserve_in=vault_in.amount,
        reserve_out=vault_out.amount,
        amount_in=amount_in,
    )
    if quote.amount_out < min_amount_out:
        raise SlippageExceeded(f"amount_out {quote.amount_out} < min_amount_out {min_amount_out}")
    if quote.amount_out == 0:
        raise InvalidAmount(f"amount_in {amount_in} is too small to pay out anything")

    ledger.transfer_checked(
        source=user_in.address,
        destination=vault_in.address,
        mint=mint_in.address,
        amount=amount_in,
        decimals=mint_in.decimals,
        authority=UserAuthority(accounts.user),
    )
    ledger.transfer_checked(
        source=vault_out.address,
        destination=user_out.address,
        mint=mint_out.address,
        amount=quote.amount_out,
        decimals=mint_out.decimals,
        authority=pool.authority,
    )

    return SwapExecution(
        direction=direction,
        amount_in=amount_in,
        amount_out=quote.amount_out,
        fee=quote.fee,
        reserve_in_after=quote.new_reserve_in,
        reserve_out_after=quote.new_reserve_out,
        k_before=quote.k_before,
        k_after=quote.k_after,
    )
