# [TESTER] v1

from __future__ import annotations

import pytest

from mini_amm.kernels.python.checked_math import U64_MAX
from mini_amm.kernels.python.lp_math import burn_liquidity, mint_liquidity, mint_liquidity_initial


def test_bootstrap_mint_is_geometric_mean() -> None:
    assert mint_liquidity_initial(amount_a=100, amount_b=400) == 200
    # floor(sqrt(2 * 3)) == 2
    assert mint_liquidity_initial(amount_a=2, amount_b=3) == 2


def test_bootstrap_mint_of_max_amounts_fits_u64() -> None:
    assert mint_liquidity_initial(amount_a=U64_MAX, amount_b=U64_MAX) == U64_MAX


def test_subsequent_mint_takes_the_worse_ratio() -> None:
    res = mint_liquidity(
        reserve_a=1000,
        reserve_b=2000,
        total_supply=300,
        amount_a=100,
        amount_b=100,
        bootstrap=False,
    )
    assert res.lp_from_a == 30
    assert res.lp_from_b == 15
    assert res.liquidity_minted == 15
    assert not res.bootstrap


def test_bootstrap_flag_ignores_stale_reserves() -> None:
    # The caller decides bootstrap from the record's tracked supply, not from reserves.
    res = mint_liquidity(reserve_a=5, reserve_b=7, total_supply=0, amount_a=100, amount_b=400, bootstrap=True)
    assert res.liquidity_minted == 200
    assert res.bootstrap


def test_dust_deposit_mints_zero_without_raising() -> None:
    res = mint_liquidity(
        reserve_a=10**12,
        reserve_b=10**12,
        total_supply=10,
        amount_a=1,
        amount_b=1,
        bootstrap=False,
    )
    assert res.liquidity_minted == 0


def test_subsequent_mint_with_empty_reserve_divides_by_zero() -> None:
    with pytest.raises(ZeroDivisionError):
        mint_liquidity(reserve_a=0, reserve_b=10, total_supply=10, amount_a=1, amount_b=1, bootstrap=False)


def test_mint_result_that_does_not_fit_u64_raises() -> None:
    with pytest.raises(OverflowError, match="lp_from_a"):
        mint_liquidity(
            reserve_a=1,
            reserve_b=1,
            total_supply=U64_MAX,
            amount_a=2,
            amount_b=2,
            bootstrap=False,
        )


def test_burn_is_proportional_and_floors() -> None:
    res = burn_liquidity(lp_amount=30, reserve_a=1000, reserve_b=2000, total_supply=300)
    assert (res.amount_a_out, res.amount_b_out) == (100, 200)

    res = burn_liquidity(lp_amount=1, reserve_a=10, reserve_b=20, total_supply=3)
    assert (res.amount_a_out, res.amount_b_out) == (3, 6)


def test_burning_entire_supply_empties_reserves() -> None:
    res = burn_liquidity(lp_amount=77, reserve_a=1234, reserve_b=5678, total_supply=77)
    assert (res.amount_a_out, res.amount_b_out) == (1234, 5678)


def test_burn_more_than_supply_is_rejected() -> None:
    with pytest.raises(ValueError, match="total_supply"):
        burn_liquidity(lp_amount=301, reserve_a=1000, reserve_b=2000, total_supply=300)
