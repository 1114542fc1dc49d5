"""
Validation layer shared by all operations.

Checks, in order:
1. The pool record exists, decodes, and names exactly the presented vaults and claim mint.
2. The pool, claim-mint and vault addresses re-derive from the presented asset pair
   and the bumps stored in the record (this binding is what makes the pool's
   signing capability unforgeable).
3. Vaults hold the expected assets and are controlled by the pool.
4. User-held accounts hold the expected asset and are controlled by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..config import AmmConfig
from ..custody.interface import ProgramAuthority, RecordStore, TokenCustody, signer_for
from ..state.accounts import Address, AssetId, MintInfo, TokenAccountInfo
from ..state.pools import (
    PoolState,
    create_program_address,
    find_program_address,
    lp_mint_seeds,
    pool_seeds,
    vault_a_seeds,
    vault_b_seeds,
)
from .accounts import PoolAccounts
from .errors import InvalidTokenMint, InvalidTokenOwner, PoolAccountMismatch


@dataclass(frozen=True)
class BoundPool:
    """A pool record together with the accounts proven to belong to it."""

    address: Address
    state: PoolState
    vault_a: TokenAccountInfo
    vault_b: TokenAccountInfo
    lp_mint: MintInfo
    mint_a: MintInfo
    mint_b: MintInfo
    authority: ProgramAuthority

    @property
    def reserve_a(self) -> int:
        return self.vault_a.amount

    @property
    def reserve_b(self) -> int:
        return self.vault_b.amount


def _require_binding(name: str, presented: Address, expected: Address) -> None:
    if presented != expected:
        raise PoolAccountMismatch(f"{name}: presented {presented}, expected {expected}")


def load_pool_state(store: RecordStore, pool: Address) -> PoolState:
    try:
        return PoolState.decode(store.load_record(pool))
    except ValueError as exc:
        raise PoolAccountMismatch(f"{pool} is not a pool record: {exc}") from exc


def load_bound_pool(
    custody: TokenCustody,
    store: RecordStore,
    config: AmmConfig,
    accounts: PoolAccounts,
) -> BoundPool:
    state = load_pool_state(store, accounts.pool)

    _require_binding("token_a_vault", accounts.token_a_vault, state.token_a_vault)
    _require_binding("token_b_vault", accounts.token_b_vault, state.token_b_vault)
    _require_binding("lp_mint", accounts.lp_mint, state.lp_mint)

    try:
        expected_pool = create_program_address(pool_seeds(state.lp_mint), state.bump, config.program_id)
        expected_lp_mint = create_program_address(
            lp_mint_seeds(accounts.token_a_mint, accounts.token_b_mint),
            state.bump_lp_mint,
            config.program_id,
        )
    except (TypeError, ValueError) as exc:
        raise PoolAccountMismatch(f"cannot derive pool addresses: {exc}") from exc
    expected_vault_a, _ = find_program_address(vault_a_seeds(state.lp_mint), config.program_id)
    expected_vault_b, _ = find_program_address(vault_b_seeds(state.lp_mint), config.program_id)
    _require_binding("pool", accounts.pool, expected_pool)
    _require_binding("lp_mint", accounts.lp_mint, expected_lp_mint)
    _require_binding("token_a_vault", accounts.token_a_vault, expected_vault_a)
    _require_binding("token_b_vault", accounts.token_b_vault, expected_vault_b)

    vault_a = custody.get_token_account(state.token_a_vault)
    vault_b = custody.get_token_account(state.token_b_vault)
    if vault_a.mint != accounts.token_a_mint:
        raise InvalidTokenMint(f"vault A holds {vault_a.mint}, expected {accounts.token_a_mint}")
    if vault_b.mint != accounts.token_b_mint:
        raise InvalidTokenMint(f"vault B holds {vault_b.mint}, expected {accounts.token_b_mint}")
    _require_binding("token_a_vault.owner", vault_a.owner, accounts.pool)
    _require_binding("token_b_vault.owner", vault_b.owner, accounts.pool)

    return BoundPool(
        address=accounts.pool,
        state=state,
        vault_a=vault_a,
        vault_b=vault_b,
        lp_mint=custody.get_mint(state.lp_mint),
        mint_a=custody.get_mint(accounts.token_a_mint),
        mint_b=custody.get_mint(accounts.token_b_mint),
        authority=signer_for(config.program_id, pool_seeds(state.lp_mint), state.bump),
    )


def require_user_token_account(
    custody: TokenCustody,
    address: Address,
    *,
    mint: AssetId,
    user: Address,
) -> TokenAccountInfo:
    account = custody.get_token_account(address)
    if account.mint != mint:
        raise InvalidTokenMint(f"{address} holds {account.mint}, expected {mint}")
    if account.owner != user:
        raise InvalidTokenOwner(f"{address} is controlled by {account.owner}, not {user}")
    return account


def require_user_token_account_in(
    custody: TokenCustody,
    address: Address,
    *,
    mints: Iterable[AssetId],
    user: Address,
) -> TokenAccountInfo:
    account = custody.get_token_account(address)
    if account.owner != user:
        raise InvalidTokenOwner(f"{address} is controlled by {account.owner}, not {user}")
    if account.mint not in set(mints):
        raise InvalidTokenMint(f"{address} holds {account.mint}, which this pool does not trade")
    return account
