# [TESTER] v1

from __future__ import annotations

import pytest

from mini_amm.state.nonces import NonceTable


SIGNER = "0x" + "ab" * 48


def test_unseen_signer_expects_nonce_one() -> None:
    table = NonceTable()
    assert table.get_last(SIGNER) == 0
    assert table.expected(SIGNER) == 1


def test_set_last_canonicalizes_signer_and_advances() -> None:
    table = NonceTable()
    table.set_last(SIGNER.upper().replace("0X", "0x"), 1)
    assert table.get_last(SIGNER) == 1
    assert table.expected(SIGNER[2:]) == 2
    assert table.get_all() == {SIGNER: 1}


def test_set_last_never_moves_backwards() -> None:
    table = NonceTable()
    table.set_last(SIGNER, 3)
    with pytest.raises(ValueError, match="must increase"):
        table.set_last(SIGNER, 3)
    with pytest.raises(ValueError):
        table.set_last(SIGNER, 2)


@pytest.mark.parametrize("bad", [True, -1, 1 << 64, "1"])
def test_set_last_rejects_non_u64(bad) -> None:
    with pytest.raises(TypeError):
        NonceTable().set_last(SIGNER, bad)


def test_get_all_is_a_copy() -> None:
    table = NonceTable()
    table.set_last(SIGNER, 1)
    snapshot = table.get_all()
    snapshot[SIGNER] = 99  # type: ignore[index]
    assert table.get_last(SIGNER) == 1
