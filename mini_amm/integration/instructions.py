"""
Instruction parsing for JSON-style transactions.

Transaction shape:

    {
        "instruction": "initialize_pool" | "add_liquidity" | "remove_liquidity" | "swap",
        "signer": "0x...",
        "nonce": 1,                   # signer's last committed nonce + 1
        "accounts": {...},
        "args": {...},
        "signature": "0x..."          # optional
    }

Parsing is strict: unknown keys, wrong types and malformed hex raise ValueError.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..core.accounts import (
    AddLiquidityAccounts,
    InitializePoolAccounts,
    PoolAccounts,
    RemoveLiquidityAccounts,
    SwapAccounts,
)
from ..kernels.python.checked_math import U64_MAX
from ..state.canonical import canonical_hex_allow_0x


class InstructionKind(Enum):
    INITIALIZE_POOL = "initialize_pool"
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SWAP = "swap"


InstructionAccounts = Union[InitializePoolAccounts, AddLiquidityAccounts, RemoveLiquidityAccounts, SwapAccounts]

_TX_KEYS = frozenset({"instruction", "signer", "nonce", "accounts", "args", "signature"})
_POOL_ACCOUNT_KEYS = ("pool", "lp_mint", "token_a_vault", "token_b_vault", "token_a_mint", "token_b_mint")

_ACCOUNT_KEYS: Dict[InstructionKind, frozenset] = {
    InstructionKind.INITIALIZE_POOL: frozenset({"payer", "token_a_mint", "token_b_mint"}),
    InstructionKind.ADD_LIQUIDITY: frozenset(
        {"user", "user_token_a", "user_token_b", "user_lp_token_account", *_POOL_ACCOUNT_KEYS}
    ),
    InstructionKind.REMOVE_LIQUIDITY: frozenset(
        {"user", "user_token_a", "user_token_b", "user_lp_token_account", *_POOL_ACCOUNT_KEYS}
    ),
    InstructionKind.SWAP: frozenset({"user", "user_token_in", "user_token_out", *_POOL_ACCOUNT_KEYS}),
}

_ARG_KEYS: Dict[InstructionKind, tuple] = {
    InstructionKind.INITIALIZE_POOL: (),
    InstructionKind.ADD_LIQUIDITY: ("amount_a", "amount_b"),
    InstructionKind.REMOVE_LIQUIDITY: ("lp_burn",),
    InstructionKind.SWAP: ("amount_in", "min_amount_out"),
}


def _require_str(value: Any, *, name: str, max_len: int = 256) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int")
    return int(value)


def _require_object(value: Any, *, name: str, allowed: frozenset) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be an object")
    for k in value.keys():
        if not isinstance(k, str):
            raise ValueError(f"{name} keys must be strings")
    unknown = sorted(set(value.keys()) - allowed)
    if unknown:
        raise ValueError(f"{name} has unknown keys: {unknown}")
    missing = sorted(allowed - set(value.keys()))
    if missing:
        raise ValueError(f"{name} is missing keys: {missing}")
    return dict(value)


def _require_address(value: Any, *, name: str, nbytes: Optional[int] = None) -> str:
    s = _require_str(value, name=name)
    return canonical_hex_allow_0x(s, name=name, nbytes=nbytes)


@dataclass(frozen=True)
class Instruction:
    kind: InstructionKind
    signer: str
    nonce: int
    accounts: InstructionAccounts
    args: Dict[str, int]
    signature: Optional[str] = None

    @property
    def authority(self) -> str:
        """Party that must sign: the payer for pool creation, the user otherwise."""
        if isinstance(self.accounts, InitializePoolAccounts):
            return self.accounts.payer
        return self.accounts.user


def _parse_pool_accounts(obj: Mapping[str, Any]) -> PoolAccounts:
    return PoolAccounts(**{k: _require_address(obj[k], name=f"accounts.{k}", nbytes=32) for k in _POOL_ACCOUNT_KEYS})


def _parse_accounts(kind: InstructionKind, value: Any) -> InstructionAccounts:
    obj = _require_object(value, name="accounts", allowed=_ACCOUNT_KEYS[kind])
    if kind is InstructionKind.INITIALIZE_POOL:
        return InitializePoolAccounts(
            payer=_require_address(obj["payer"], name="accounts.payer"),
            token_a_mint=_require_address(obj["token_a_mint"], name="accounts.token_a_mint", nbytes=32),
            token_b_mint=_require_address(obj["token_b_mint"], name="accounts.token_b_mint", nbytes=32),
        )

    pool = _parse_pool_accounts(obj)
    user = _require_address(obj["user"], name="accounts.user")
    if kind is InstructionKind.SWAP:
        return SwapAccounts(
            user=user,
            pool=pool,
            user_token_in=_require_address(obj["user_token_in"], name="accounts.user_token_in"),
            user_token_out=_require_address(obj["user_token_out"], name="accounts.user_token_out"),
        )

    cls = AddLiquidityAccounts if kind is InstructionKind.ADD_LIQUIDITY else RemoveLiquidityAccounts
    return cls(
        user=user,
        pool=pool,
        user_token_a=_require_address(obj["user_token_a"], name="accounts.user_token_a"),
        user_token_b=_require_address(obj["user_token_b"], name="accounts.user_token_b"),
        user_lp_token_account=_require_address(obj["user_lp_token_account"], name="accounts.user_lp_token_account"),
    )


def _parse_args(kind: InstructionKind, value: Any) -> Dict[str, int]:
    if value is None and not _ARG_KEYS[kind]:
        return {}
    obj = _require_object(value, name="args", allowed=frozenset(_ARG_KEYS[kind]))
    # Range checks belong to the core; here only the JSON type is enforced.
    return {k: _require_int(obj[k], name=f"args.{k}") for k in _ARG_KEYS[kind]}


def parse_transaction(tx: Mapping[str, Any]) -> Instruction:
    """
    Parse a transaction object into a typed `Instruction`.

    Raises:
        ValueError: If the transaction structure is invalid
    """
    if not isinstance(tx, Mapping):
        raise ValueError(f"transaction must be an object, got {type(tx)}")
    unknown = sorted(set(tx.keys()) - _TX_KEYS)
    if unknown:
        raise ValueError(f"transaction has unknown keys: {unknown}")

    raw_kind = _require_str(tx.get("instruction"), name="instruction")
    try:
        kind = InstructionKind(raw_kind)
    except ValueError as exc:
        raise ValueError(f"unknown instruction: {raw_kind!r}") from exc

    signer = _require_address(tx.get("signer"), name="signer")
    nonce = _require_int(tx.get("nonce"), name="nonce")
    if not (1 <= nonce <= U64_MAX):
        raise ValueError(f"nonce must be in [1, 2^64 - 1]: {nonce}")
    accounts = _parse_accounts(kind, tx.get("accounts"))
    args = _parse_args(kind, tx.get("args"))

    signature = tx.get("signature")
    if signature is not None:
        signature = _require_str(signature, name="signature")

    return Instruction(kind=kind, signer=signer, nonce=nonce, accounts=accounts, args=args, signature=signature)


def create_transaction(
    kind: InstructionKind,
    *,
    signer: str,
    nonce: int,
    accounts: InstructionAccounts,
    args: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Build the unsigned transaction object for `accounts` (inverse of `parse_transaction`)."""
    if isinstance(accounts, InitializePoolAccounts):
        accounts_obj: Dict[str, Any] = {
            "payer": accounts.payer,
            "token_a_mint": accounts.token_a_mint,
            "token_b_mint": accounts.token_b_mint,
        }
    else:
        accounts_obj = {k: getattr(accounts.pool, k) for k in _POOL_ACCOUNT_KEYS}
        accounts_obj["user"] = accounts.user
        if isinstance(accounts, SwapAccounts):
            accounts_obj["user_token_in"] = accounts.user_token_in
            accounts_obj["user_token_out"] = accounts.user_token_out
        else:
            accounts_obj["user_token_a"] = accounts.user_token_a
            accounts_obj["user_token_b"] = accounts.user_token_b
            accounts_obj["user_lp_token_account"] = accounts.user_lp_token_account
    return {
        "instruction": kind.value,
        "signer": signer,
        "nonce": nonce,
        "accounts": accounts_obj,
        "args": dict(args or {}),
    }
