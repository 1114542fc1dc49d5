# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from mini_amm.config import DEFAULT_PROGRAM_ID
from mini_amm.state.canonical import canonical_json_bytes, domain_sep_bytes
from mini_amm.state.pools import (
    MAX_BUMP,
    POOL_DISCRIMINATOR,
    POOL_RECORD_SIZE,
    PoolState,
    canonical_pair,
    create_program_address,
    derive_pool_addresses,
    find_program_address,
    pool_seeds,
)


MINT_X = "0x" + "11" * 32
MINT_Y = "0x" + "22" * 32
OTHER_PROGRAM = "0x" + "99" * 32


def test_pool_record_layout_is_fixed_size() -> None:
    assert POOL_RECORD_SIZE == 8 + 32 + 32 + 32 + 1 + 8 + 1 == 114

    state = PoolState.new(derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y))
    data = state.encode()
    assert len(data) == POOL_RECORD_SIZE
    assert data[:8] == POOL_DISCRIMINATOR
    assert PoolState.decode(data) == state


def test_pool_record_total_lp_is_little_endian_u64() -> None:
    state = PoolState.new(derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y))
    data = replace(state, total_lp=0x0102030405060708).encode()
    # discriminator(8) + three addresses(96) + bump(1)
    assert data[105:113] == bytes([8, 7, 6, 5, 4, 3, 2, 1])


def test_pool_record_decode_rejects_wrong_size_and_discriminator() -> None:
    data = PoolState.new(derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y)).encode()
    with pytest.raises(ValueError, match="bytes"):
        PoolState.decode(data[:-1])
    with pytest.raises(ValueError, match="discriminator"):
        PoolState.decode(b"\x00" * 8 + data[8:])


def test_pool_state_validates_fields() -> None:
    state = PoolState.new(derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y))
    with pytest.raises(ValueError, match="total_lp"):
        replace(state, total_lp=-1)
    with pytest.raises(ValueError, match="bump"):
        replace(state, bump=256)
    with pytest.raises(ValueError, match="distinct"):
        replace(state, token_b_vault=state.token_a_vault)


def test_canonical_pair_orders_and_rejects_identical_mints() -> None:
    assert canonical_pair(MINT_Y, MINT_X) == (MINT_X, MINT_Y)
    assert canonical_pair("0x" + "AB" * 32, MINT_X) == (MINT_X, "0x" + "ab" * 32)
    with pytest.raises(ValueError, match="differ"):
        canonical_pair(MINT_X, MINT_X)


def test_pool_addresses_do_not_depend_on_argument_order() -> None:
    a = derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y)
    b = derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_Y, MINT_X)
    assert a == b
    assert a.token_a_mint == MINT_X
    assert len({a.pool, a.lp_mint, a.token_a_vault, a.token_b_vault}) == 4


def test_pool_addresses_are_scoped_to_the_program() -> None:
    a = derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y)
    b = derive_pool_addresses(OTHER_PROGRAM, MINT_X, MINT_Y)
    assert a.pool != b.pool
    assert a.lp_mint != b.lp_mint


def test_derived_address_depends_on_seeds_and_bump() -> None:
    addr, bump = find_program_address(pool_seeds(MINT_X), DEFAULT_PROGRAM_ID)
    assert bump == MAX_BUMP
    assert addr == create_program_address(pool_seeds(MINT_X), MAX_BUMP, DEFAULT_PROGRAM_ID)
    assert addr != create_program_address(pool_seeds(MINT_X), MAX_BUMP - 1, DEFAULT_PROGRAM_ID)
    assert addr != create_program_address(pool_seeds(MINT_Y), MAX_BUMP, DEFAULT_PROGRAM_ID)


def test_create_program_address_rejects_oversized_seeds() -> None:
    with pytest.raises(ValueError, match="seed"):
        create_program_address([b"x" * 33], 255, DEFAULT_PROGRAM_ID)


def test_canonical_json_bytes_is_key_order_independent_and_rejects_floats() -> None:
    assert canonical_json_bytes({"b": 1, "a": [2, 3]}) == b'{"a":[2,3],"b":1}'
    assert canonical_json_bytes({"a": [2, 3], "b": 1}) == canonical_json_bytes({"b": 1, "a": [2, 3]})
    with pytest.raises(TypeError, match="floats"):
        canonical_json_bytes({"amount": 1.5})


def test_domain_sep_bytes_is_nul_terminated_and_versioned() -> None:
    assert domain_sep_bytes("program_id") == b"mini_amm:program_id:v1\x00"
    assert domain_sep_bytes("x", version=2) != domain_sep_bytes("x")
    with pytest.raises(ValueError):
        domain_sep_bytes("bad\x00label")
