# [TESTER] v1

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import pytest

from mini_amm.config import AmmConfig
from mini_amm.core.accounts import (
    AddLiquidityAccounts,
    InitializePoolAccounts,
    RemoveLiquidityAccounts,
    SwapAccounts,
)
from mini_amm.core.liquidity import initialize_pool
from mini_amm.custody import InMemoryLedger, UserAuthority
from mini_amm.state.pools import PoolAddresses


MINT_X = "0x" + "11" * 32
MINT_Y = "0x" + "22" * 32
ISSUER = "0x" + "ee" * 32
USER = "0x" + "ab" * 48
OTHER_USER = "0x" + "cd" * 48


@dataclass
class PoolFixture:
    ledger: InMemoryLedger
    config: AmmConfig
    addresses: PoolAddresses
    user: str
    user_token_a: str
    user_token_b: str
    user_lp: str

    def fund(self, owner: str, *, amount_a: int = 0, amount_b: int = 0) -> tuple:
        """Mint pair assets to `owner`'s associated accounts; returns (acct_a, acct_b, acct_lp)."""
        acct_a = self.ledger.get_or_create_associated_token_account(owner=owner, mint=self.addresses.token_a_mint)
        acct_b = self.ledger.get_or_create_associated_token_account(owner=owner, mint=self.addresses.token_b_mint)
        acct_lp = self.ledger.get_or_create_associated_token_account(owner=owner, mint=self.addresses.lp_mint)
        issuer = UserAuthority(ISSUER)
        if amount_a:
            self.ledger.mint_to(mint=self.addresses.token_a_mint, destination=acct_a.address, amount=amount_a, authority=issuer)
        if amount_b:
            self.ledger.mint_to(mint=self.addresses.token_b_mint, destination=acct_b.address, amount=amount_b, authority=issuer)
        return acct_a.address, acct_b.address, acct_lp.address

    def add_accounts(self, **overrides: str) -> AddLiquidityAccounts:
        fields = dict(
            user=self.user,
            user_token_a=self.user_token_a,
            user_token_b=self.user_token_b,
            user_lp_token_account=self.user_lp,
        )
        fields.update(overrides)
        return AddLiquidityAccounts.for_pool(self.addresses, **fields)

    def remove_accounts(self, **overrides: str) -> RemoveLiquidityAccounts:
        fields = dict(
            user=self.user,
            user_token_a=self.user_token_a,
            user_token_b=self.user_token_b,
            user_lp_token_account=self.user_lp,
        )
        fields.update(overrides)
        return RemoveLiquidityAccounts.for_pool(self.addresses, **fields)

    def swap_accounts(self, *, a_to_b: bool = True, **overrides: str) -> SwapAccounts:
        if a_to_b:
            fields = dict(user=self.user, user_token_in=self.user_token_a, user_token_out=self.user_token_b)
        else:
            fields = dict(user=self.user, user_token_in=self.user_token_b, user_token_out=self.user_token_a)
        fields.update(overrides)
        return SwapAccounts.for_pool(self.addresses, **fields)

    def balance(self, address: str) -> int:
        return self.ledger.balance(address)

    def reserves(self) -> tuple:
        return (
            self.ledger.balance(self.addresses.token_a_vault),
            self.ledger.balance(self.addresses.token_b_vault),
        )

    def lp_supply(self) -> int:
        return self.ledger.get_mint(self.addresses.lp_mint).supply


def make_pool(
    *,
    balance_a: int = 10**12,
    balance_b: int = 10**12,
    user: str = USER,
    config: Optional[AmmConfig] = None,
    decimals_a: int = 6,
    decimals_b: int = 9,
) -> PoolFixture:
    ledger = InMemoryLedger()
    cfg = config or AmmConfig()
    ledger.create_mint(MINT_X, decimals=decimals_a, mint_authority=ISSUER)
    ledger.create_mint(MINT_Y, decimals=decimals_b, mint_authority=ISSUER)
    addresses = initialize_pool(
        ledger,
        cfg,
        InitializePoolAccounts(payer=user, token_a_mint=MINT_X, token_b_mint=MINT_Y),
    )
    fx = PoolFixture(
        ledger=ledger,
        config=cfg,
        addresses=addresses,
        user=user,
        user_token_a="",
        user_token_b="",
        user_lp="",
    )
    fx.user_token_a, fx.user_token_b, fx.user_lp = fx.fund(user, amount_a=balance_a, amount_b=balance_b)
    return fx


@pytest.fixture
def pool_factory() -> Callable[..., PoolFixture]:
    return make_pool


@pytest.fixture
def pool() -> PoolFixture:
    return make_pool()
