# [TESTER] v1

from __future__ import annotations

import pytest

from mini_amm.config import DEFAULT_PROGRAM_ID
from mini_amm.core.accounts import AddLiquidityAccounts, InitializePoolAccounts, SwapAccounts
from mini_amm.integration.instructions import InstructionKind, create_transaction, parse_transaction
from mini_amm.state.pools import derive_pool_addresses


USER = "0x" + "ab" * 48
MINT_X = "0x" + "11" * 32
MINT_Y = "0x" + "22" * 32
ADDRS = derive_pool_addresses(DEFAULT_PROGRAM_ID, MINT_X, MINT_Y)


def _swap_tx() -> dict:
    accounts = SwapAccounts.for_pool(ADDRS, user=USER, user_token_in="0x" + "01" * 32, user_token_out="0x" + "02" * 32)
    return create_transaction(
        InstructionKind.SWAP,
        signer=USER,
        nonce=1,
        accounts=accounts,
        args={"amount_in": 100, "min_amount_out": 180},
    )


def test_create_then_parse_returns_the_same_accounts() -> None:
    tx = _swap_tx()
    ins = parse_transaction(tx)
    assert ins.kind is InstructionKind.SWAP
    assert ins.signer == USER
    assert ins.nonce == 1
    assert ins.authority == USER
    assert ins.args == {"amount_in": 100, "min_amount_out": 180}
    assert isinstance(ins.accounts, SwapAccounts)
    assert ins.accounts.pool.pool == ADDRS.pool
    assert ins.signature is None


def test_parse_canonicalizes_hex_addresses() -> None:
    tx = _swap_tx()
    tx["signer"] = USER.upper().replace("0X", "0x")
    tx["accounts"]["user"] = USER[2:].upper()
    ins = parse_transaction(tx)
    assert ins.signer == USER
    assert ins.accounts.user == USER


def test_initialize_pool_authority_is_the_payer() -> None:
    tx = create_transaction(
        InstructionKind.INITIALIZE_POOL,
        signer=USER,
        nonce=1,
        accounts=InitializePoolAccounts(payer=USER, token_a_mint=MINT_X, token_b_mint=MINT_Y),
    )
    ins = parse_transaction(tx)
    assert ins.authority == USER
    assert ins.args == {}


def test_add_liquidity_accounts_are_fully_parsed() -> None:
    accounts = AddLiquidityAccounts.for_pool(
        ADDRS,
        user=USER,
        user_token_a="0x" + "01" * 32,
        user_token_b="0x" + "02" * 32,
        user_lp_token_account="0x" + "03" * 32,
    )
    tx = create_transaction(
        InstructionKind.ADD_LIQUIDITY, signer=USER, nonce=7, accounts=accounts, args={"amount_a": 1, "amount_b": 2}
    )
    assert parse_transaction(tx).accounts == accounts


@pytest.mark.parametrize(
    "mutate,match",
    [
        (lambda tx: tx.update(instruction="flash_loan"), "unknown instruction"),
        (lambda tx: tx.update(extra=1), "unknown keys"),
        (lambda tx: tx.update(signer=123), "signer must be a string"),
        (lambda tx: tx.pop("nonce"), "nonce must be an int"),
        (lambda tx: tx.update(nonce="1"), "nonce must be an int"),
        (lambda tx: tx.update(nonce=0), "nonce must be in"),
        (lambda tx: tx.update(nonce=1 << 64), "nonce must be in"),
        (lambda tx: tx["accounts"].pop("pool"), "missing keys"),
        (lambda tx: tx["accounts"].update(bogus="0x00"), "unknown keys"),
        (lambda tx: tx["accounts"].update(pool="0x1234"), "32 bytes"),
        (lambda tx: tx["accounts"].update(user="not-hex"), "hex"),
        (lambda tx: tx["args"].update(amount_in="100"), "must be an int"),
        (lambda tx: tx["args"].update(amount_in=True), "must be an int"),
        (lambda tx: tx["args"].pop("min_amount_out"), "missing keys"),
        (lambda tx: tx.update(args=None), "args must be an object"),
        (lambda tx: tx.update(signature=7), "signature must be a string"),
    ],
)
def test_parse_transaction_rejects_malformed_input(mutate, match: str) -> None:
    tx = _swap_tx()
    mutate(tx)
    with pytest.raises(ValueError, match=match):
        parse_transaction(tx)


def test_parse_transaction_rejects_non_object() -> None:
    with pytest.raises(ValueError):
        parse_transaction(["swap"])  # type: ignore[arg-type]
