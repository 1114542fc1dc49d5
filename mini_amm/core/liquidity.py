"""
Liquidity management operations: initialize pool, add/remove liquidity.

Every fallible computation runs before the first asset movement; the record
write is always last. Atomicity across the custody calls is provided by the
caller's ledger transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import AmmConfig
from ..custody.interface import Ledger, UserAuthority
from ..state.accounts import Amount
from ..state.pools import PoolAddresses, PoolState, derive_pool_addresses
from .accounts import AddLiquidityAccounts, InitializePoolAccounts, RemoveLiquidityAccounts
from .cpmm import compute_lp_burn, compute_lp_mint, decrease_total_lp, increase_total_lp, require_u64
from .errors import InvalidAmount, InvalidTokenMint, ZeroLiquidityInput, ZeroLpMint
from .validation import load_bound_pool, require_user_token_account


@dataclass(frozen=True)
class LiquidityDeposit:
    amount_a: Amount
    amount_b: Amount
    lp_minted: Amount
    total_lp: Amount
    bootstrap: bool


@dataclass(frozen=True)
class LiquidityWithdrawal:
    lp_burned: Amount
    amount_a: Amount
    amount_b: Amount
    total_lp: Amount


def initialize_pool(ledger: Ledger, config: AmmConfig, accounts: InitializePoolAccounts) -> PoolAddresses:
    """
    Create the pool record, its two empty vaults and its claim-token mint.

    Addresses are derived from the ordered asset pair, so a second pool for the
    same (unordered) pair collides with the first and the allocation fails with
    `RecordAlreadyExists`.

    Raises:
        InvalidTokenMint: if the two assets are identical or malformed
        AccountNotFound: if either asset mint does not exist
        RecordAlreadyExists: if the pair already has a pool
    """
    try:
        addresses = derive_pool_addresses(config.program_id, accounts.token_a_mint, accounts.token_b_mint)
    except ValueError as exc:
        raise InvalidTokenMint(str(exc)) from exc

    ledger.get_mint(addresses.token_a_mint)
    ledger.get_mint(addresses.token_b_mint)

    ledger.allocate_record(addresses.pool, PoolState.new(addresses).encode())
    ledger.create_mint(addresses.lp_mint, decimals=config.lp_mint_decimals, mint_authority=addresses.pool)
    ledger.create_token_account(addresses.token_a_vault, mint=addresses.token_a_mint, owner=addresses.pool)
    ledger.create_token_account(addresses.token_b_vault, mint=addresses.token_b_mint, owner=addresses.pool)
    return addresses


def add_liquidity(
    ledger: Ledger,
    config: AmmConfig,
    accounts: AddLiquidityAccounts,
    amount_a: Amount,
    amount_b: Amount,
) -> LiquidityDeposit:
    """
    Deposit both assets and mint claim tokens to the caller.

    The whole of both amounts is transferred in; an imbalanced deposit is priced
    at the worse of its two ratios.

    Raises:
        ZeroLiquidityInput: if either amount is zero
        ZeroLpMint: if the deposit is too small to mint any claim token
        MathOverflow: if the claim amount or the tracked supply overflows
    """
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)
    if amount_a == 0 or amount_b == 0:
        raise ZeroLiquidityInput(f"({amount_a}, {amount_b})")

    pool = load_bound_pool(ledger, ledger, config, accounts.pool)
    user_token_a = require_user_token_account(
        ledger, accounts.user_token_a, mint=accounts.pool.token_a_mint, user=accounts.user
    )
    user_token_b = require_user_token_account(
        ledger, accounts.user_token_b, mint=accounts.pool.token_b_mint, user=accounts.user
    )
    user_lp = require_user_token_account(
        ledger, accounts.user_lp_token_account, mint=pool.state.lp_mint, user=accounts.user
    )

    bootstrap = pool.state.total_lp == 0
    lp_minted = compute_lp_mint(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=pool.lp_mint.supply,
        total_lp=pool.state.total_lp,
        amount_a=amount_a,
        amount_b=amount_b,
    )
    if lp_minted == 0:
        raise ZeroLpMint(f"deposit ({amount_a}, {amount_b}) mints nothing")
    total_lp = increase_total_lp(pool.state.total_lp, lp_minted)

    user = UserAuthority(accounts.user)
    ledger.transfer_checked(
        source=user_token_a.address,
        destination=pool.vault_a.address,
        mint=pool.mint_a.address,
        amount=amount_a,
        decimals=pool.mint_a.decimals,
        authority=user,
    )
    ledger.transfer_checked(
        source=user_token_b.address,
        destination=pool.vault_b.address,
        mint=pool.mint_b.address,
        amount=amount_b,
        decimals=pool.mint_b.decimals,
        authority=user,
    )
    ledger.mint_to(
        mint=pool.lp_mint.address,
        destination=user_lp.address,
        amount=lp_minted,
        authority=pool.authority,
    )
    ledger.store_record(pool.address, replace(pool.state, total_lp=total_lp).encode())

    return LiquidityDeposit(
        amount_a=amount_a,
        amount_b=amount_b,
        lp_minted=lp_minted,
        total_lp=total_lp,
        bootstrap=bootstrap,
    )


def remove_liquidity(
    ledger: Ledger,
    config: AmmConfig,
    accounts: RemoveLiquidityAccounts,
    lp_burn: Amount,
) -> LiquidityWithdrawal:
    """
    Burn claim tokens and pay out the proportional share of both reserves.

    Outputs use reserves and supply as observed before this withdrawal:
        amount_a = floor(reserve_a * lp_burn / supply)
        amount_b = floor(reserve_b * lp_burn / supply)

    The burn precedes both outbound transfers.

    Raises:
        InvalidAmount: if lp_burn is zero or exceeds the supply or the caller's balance
        MathOverflow: if the tracked supply would underflow
    """
    require_u64("lp_burn", lp_burn)
    if lp_burn == 0:
        raise InvalidAmount("lp_burn must be positive")

    pool = load_bound_pool(ledger, ledger, config, accounts.pool)
    user_token_a = require_user_token_account(
        ledger, accounts.user_token_a, mint=accounts.pool.token_a_mint, user=accounts.user
    )
    user_token_b = require_user_token_account(
        ledger, accounts.user_token_b, mint=accounts.pool.token_b_mint, user=accounts.user
    )
    user_lp = require_user_token_account(
        ledger, accounts.user_lp_token_account, mint=pool.state.lp_mint, user=accounts.user
    )

    supply = pool.lp_mint.supply
    if lp_burn > supply:
        raise InvalidAmount(f"lp_burn {lp_burn} exceeds supply {supply}")
    if lp_burn > user_lp.amount:
        raise InvalidAmount(f"lp_burn {lp_burn} exceeds balance {user_lp.amount}")

    amount_a, amount_b = compute_lp_burn(
        lp_amount=lp_burn,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=supply,
    )
    total_lp = decrease_total_lp(pool.state.total_lp, lp_burn)

    ledger.burn_checked(
        mint=pool.lp_mint.address,
        account=user_lp.address,
        amount=lp_burn,
        decimals=pool.lp_mint.decimals,
        authority=UserAuthority(accounts.user),
    )
    ledger.transfer_checked(
        source=pool.vault_a.address,
        destination=user_token_a.address,
        mint=pool.mint_a.address,
        amount=amount_a,
        decimals=pool.mint_a.decimals,
        authority=pool.authority,
    )
    ledger.transfer_checked(
        source=pool.vault_b.address,
        destination=user_token_b.address,
        mint=pool.mint_b.address,
        amount=amount_b,
        decimals=pool.mint_b.decimals,
        authority=pool.authority,
    )
    ledger.store_record(pool.address, replace(pool.state, total_lp=total_lp).encode())

    return LiquidityWithdrawal(
        lp_burned=lp_burn,
        amount_a=amount_a,
        amount_b=amount_b,
        total_lp=total_lp,
    )
