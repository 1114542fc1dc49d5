# [TESTER] v1

from __future__ import annotations

import pytest

from mini_amm.core.accounts import PoolAccounts
from mini_amm.core.errors import InvalidAmount, InvalidTokenMint, ZeroLiquidityInput
from mini_amm.core.liquidity import add_liquidity, remove_liquidity
from mini_amm.core.quotes import (
    get_pool_info,
    min_amount_out,
    quote_add_liquidity,
    quote_remove_liquidity,
    quote_swap,
)
from mini_amm.core.swap import SwapDirection, swap


def _seeded(fx):
    add_liquidity(fx.ledger, fx.config, fx.add_accounts(), 1000, 2000)
    return PoolAccounts.from_addresses(fx.addresses)


def test_pool_info_reports_reserves_supply_and_k(pool) -> None:
    info = get_pool_info(pool.ledger, pool.config, _seeded(pool))
    assert info.pool == pool.addresses.pool
    assert (info.token_a_mint, info.token_b_mint) == (pool.addresses.token_a_mint, pool.addresses.token_b_mint)
    assert (info.reserve_a, info.reserve_b) == (1000, 2000)
    assert info.total_lp == info.lp_supply == 1414
    assert info.k == 2_000_000


def test_quote_swap_matches_execution_in_both_directions(pool) -> None:
    accounts = _seeded(pool)
    q = quote_swap(pool.ledger, pool.config, accounts, pool.addresses.token_a_mint, 100)
    assert q.direction is SwapDirection.A_TO_B
    assert (q.amount_out, q.fee) == (180, 1)
    # Quoting does not touch custody.
    assert pool.reserves() == (1000, 2000)

    q_b = quote_swap(pool.ledger, pool.config, accounts, pool.addresses.token_b_mint, 100)
    res = swap(pool.ledger, pool.config, pool.swap_accounts(a_to_b=False), 100, q_b.amount_out)
    assert res.amount_out == q_b.amount_out == 47


def test_quote_swap_rejects_foreign_asset_and_dust(pool) -> None:
    accounts = _seeded(pool)
    with pytest.raises(InvalidTokenMint):
        quote_swap(pool.ledger, pool.config, accounts, "0x" + "33" * 32, 100)
    with pytest.raises(InvalidAmount):
        quote_swap(pool.ledger, pool.config, accounts, pool.addresses.token_a_mint, 0)
    with pytest.raises(InvalidAmount, match="too small"):
        quote_swap(pool.ledger, pool.config, accounts, pool.addresses.token_a_mint, 1)


def test_quote_add_liquidity_matches_execution(pool) -> None:
    accounts = PoolAccounts.from_addresses(pool.addresses)
    assert quote_add_liquidity(pool.ledger, pool.config, accounts, 100, 400) == 200
    add_liquidity(pool.ledger, pool.config, pool.add_accounts(), 1000, 2000)

    quoted = quote_add_liquidity(pool.ledger, pool.config, accounts, 100, 100)
    assert quoted == 70
    assert add_liquidity(pool.ledger, pool.config, pool.add_accounts(), 100, 100).lp_minted == quoted
    with pytest.raises(ZeroLiquidityInput):
        quote_add_liquidity(pool.ledger, pool.config, accounts, 0, 100)


def test_quote_remove_liquidity_matches_execution(pool) -> None:
    accounts = _seeded(pool)
    quoted = quote_remove_liquidity(pool.ledger, pool.config, accounts, 141)
    assert quoted == (99, 199)
    res = remove_liquidity(pool.ledger, pool.config, pool.remove_accounts(), 141)
    assert (res.amount_a, res.amount_b) == quoted
    with pytest.raises(InvalidAmount):
        quote_remove_liquidity(pool.ledger, pool.config, accounts, 0)
    with pytest.raises(InvalidAmount):
        quote_remove_liquidity(pool.ledger, pool.config, accounts, 10**9)


@pytest.mark.parametrize(
    "amount_out,bps,expected",
    [(180, 50, 179), (1000, 0, 1000), (1000, 10_000, 0), (10**6, 100, 990_000)],
)
def test_min_amount_out_applies_tolerance_rounding_down(amount_out: int, bps: int, expected: int) -> None:
    assert min_amount_out(amount_out, bps) == expected


def test_min_amount_out_rejects_bad_tolerance() -> None:
    with pytest.raises(ValueError):
        min_amount_out(100, 10_001)
    with pytest.raises(ValueError):
        min_amount_out(100, -1)
    with pytest.raises(TypeError):
        min_amount_out(100, 0.5)  # type: ignore[arg-type]
