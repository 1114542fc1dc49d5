"""
Account contexts presented by callers for each operation.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state.accounts import Address, AssetId
from ..state.pools import PoolAddresses


@dataclass(frozen=True)
class InitializePoolAccounts:
    payer: Address
    token_a_mint: AssetId
    token_b_mint: AssetId


@dataclass(frozen=True)
class PoolAccounts:
    """Pool-side accounts; all of them must be bound to the pool record."""

    pool: Address
    lp_mint: Address
    token_a_vault: Address
    token_b_vault: Address
    token_a_mint: AssetId
    token_b_mint: AssetId

    @classmethod
    def from_addresses(cls, addresses: PoolAddresses) -> "PoolAccounts":
        return cls(
            pool=addresses.pool,
            lp_mint=addresses.lp_mint,
            token_a_vault=addresses.token_a_vault,
            token_b_vault=addresses.token_b_vault,
            token_a_mint=addresses.token_a_mint,
            token_b_mint=addresses.token_b_mint,
        )


@dataclass(frozen=True)
class AddLiquidityAccounts:
    user: Address
    pool: PoolAccounts
    user_token_a: Address
    user_token_b: Address
    user_lp_token_account: Address

    @classmethod
    def for_pool(
        cls,
        addresses: PoolAddresses,
        *,
        user: Address,
        user_token_a: Address,
        user_token_b: Address,
        user_lp_token_account: Address,
    ) -> "AddLiquidityAccounts":
        return cls(
            user=user,
            pool=PoolAccounts.from_addresses(addresses),
            user_token_a=user_token_a,
            user_token_b=user_token_b,
            user_lp_token_account=user_lp_token_account,
        )


@dataclass(frozen=True)
class RemoveLiquidityAccounts:
    user: Address
    pool: PoolAccounts
    user_token_a: Address
    user_token_b: Address
    user_lp_token_account: Address

    @classmethod
    def for_pool(
        cls,
        addresses: PoolAddresses,
        *,
        user: Address,
        user_token_a: Address,
        user_token_b: Address,
        user_lp_token_account: Address,
    ) -> "RemoveLiquidityAccounts":
        return cls(
            user=user,
            pool=PoolAccounts.from_addresses(addresses),
            user_token_a=user_token_a,
            user_token_b=user_token_b,
            user_lp_token_account=user_lp_token_account,
        )


@dataclass(frozen=True)
class SwapAccounts:
    """The direction is implied by which asset `user_token_in` holds."""

    user: Address
    pool: PoolAccounts
    user_token_in: Address
    user_token_out: Address

    @classmethod
    def for_pool(
        cls,
        addresses: PoolAddresses,
        *,
        user: Address,
        user_token_in: Address,
        user_token_out: Address,
    ) -> "SwapAccounts":
        return cls(
            user=user,
            pool=PoolAccounts.from_addresses(addresses),
            user_token_in=user_token_in,
            user_token_out=user_token_out,
        )
