"""
Program entry point.

This is an imperative-shell wrapper around the functional core:
- Runs each operation inside one ledger transaction (all-or-nothing).
- Parses JSON-style transactions, verifies the caller signature (optional),
  binds the signer to the instruction's user/payer, and dispatches.
- Accepts each signer's nonces strictly in sequence; a nonce is consumed only
  when its operation commits, so a replayed transaction is rejected.
- Converts failures into a `TransactionResult` only at this outermost boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import AmmConfig
from ..core.accounts import (
    AddLiquidityAccounts,
    InitializePoolAccounts,
    PoolAccounts,
    RemoveLiquidityAccounts,
    SwapAccounts,
)
from ..core.errors import AmmError, ErrorCode
from ..core.liquidity import LiquidityDeposit, LiquidityWithdrawal
from ..core.liquidity import add_liquidity as _add_liquidity
from ..core.liquidity import initialize_pool as _initialize_pool
from ..core.liquidity import remove_liquidity as _remove_liquidity
from ..core.quotes import PoolInfo, get_pool_info
from ..core.swap import SwapExecution
from ..core.swap import swap as _swap
from ..custody.errors import CustodyError
from ..custody.interface import Ledger
from ..state.nonces import NonceTable
from ..state.pools import PoolAddresses
from .instructions import Instruction, InstructionKind, parse_transaction
from .signatures import verify_transaction_signature


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramConfig:
    amm: AmmConfig = AmmConfig()

    # If True, every transaction must carry a BLS signature by its `signer`.
    # If False, the signer is trusted as authenticated upstream.
    require_signatures: bool = True

    # Signatures cover this id, so they are valid on one deployment only.
    chain_id: str = "mini-amm-local"

    def __post_init__(self) -> None:
        if not isinstance(self.amm, AmmConfig):
            raise TypeError("amm must be an AmmConfig")
        if not isinstance(self.chain_id, str) or not self.chain_id:
            raise ValueError("chain_id must be a non-empty str")


@dataclass(frozen=True)
class TransactionResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None
    code: Optional[ErrorCode] = None


class MiniAmmProgram:
    """
    Entry point over one ledger.

    Every method either commits all of its effects or raises with none applied.
    """

    def __init__(
        self,
        ledger: Ledger,
        config: ProgramConfig = ProgramConfig(),
        nonces: Optional[NonceTable] = None,
    ) -> None:
        self.ledger = ledger
        self.config = config
        self.nonces = nonces if nonces is not None else NonceTable()

    def initialize_pool(self, accounts: InitializePoolAccounts) -> PoolAddresses:
        with self.ledger.transaction():
            addresses = _initialize_pool(self.ledger, self.config.amm, accounts)
        logger.info(
            "initialized pool %s (token_a=%s token_b=%s lp_mint=%s)",
            addresses.pool,
            addresses.token_a_mint,
            addresses.token_b_mint,
            addresses.lp_mint,
        )
        return addresses

    def add_liquidity(self, accounts: AddLiquidityAccounts, amount_a: int, amount_b: int) -> LiquidityDeposit:
        with self.ledger.transaction():
            res = _add_liquidity(self.ledger, self.config.amm, accounts, amount_a, amount_b)
        logger.debug("deposit bootstrap=%s lp_minted=%s total_lp=%s", res.bootstrap, res.lp_minted, res.total_lp)
        logger.info("added liquidity to %s: (%s, %s) -> %s LP", accounts.pool.pool, amount_a, amount_b, res.lp_minted)
        return res

    def remove_liquidity(self, accounts: RemoveLiquidityAccounts, lp_burn: int) -> LiquidityWithdrawal:
        with self.ledger.transaction():
            res = _remove_liquidity(self.ledger, self.config.amm, accounts, lp_burn)
        logger.info(
            "removed liquidity from %s: %s LP -> (%s, %s)",
            accounts.pool.pool,
            lp_burn,
            res.amount_a,
            res.amount_b,
        )
        return res

    def swap(self, accounts: SwapAccounts, amount_in: int, min_amount_out: int) -> SwapExecution:
        with self.ledger.transaction():
            res = _swap(self.ledger, self.config.amm, accounts, amount_in, min_amount_out)
        logger.debug("swap k_before=%s k_after=%s fee=%s", res.k_before, res.k_after, res.fee)
        logger.info(
            "swap on %s %s: %s in -> %s out",
            accounts.pool.pool,
            res.direction.value,
            res.amount_in,
            res.amount_out,
        )
        return res

    def pool_info(self, accounts: PoolAccounts) -> PoolInfo:
        return get_pool_info(self.ledger, self.config.amm, accounts)

    # ------------------------------------------------------------------ transactions

    def _dispatch(self, instruction: Instruction) -> Any:
        kind = instruction.kind
        args = instruction.args
        if kind is InstructionKind.INITIALIZE_POOL:
            return self.initialize_pool(instruction.accounts)
        if kind is InstructionKind.ADD_LIQUIDITY:
            return self.add_liquidity(instruction.accounts, args["amount_a"], args["amount_b"])
        if kind is InstructionKind.REMOVE_LIQUIDITY:
            return self.remove_liquidity(instruction.accounts, args["lp_burn"])
        if kind is InstructionKind.SWAP:
            return self.swap(instruction.accounts, args["amount_in"], args["min_amount_out"])
        raise ValueError(f"unsupported instruction: {kind}")

    def process_transaction(self, tx: Mapping[str, Any]) -> TransactionResult:
        """
        Parse, authenticate and execute one transaction.

        Rejections (malformed input, bad signature, signer mismatch, stale or
        skipped nonce, AMM or custody errors) are returned as `ok=False`; the
        ledger and the signer's nonce are unchanged.
        """
        try:
            instruction = parse_transaction(tx)
        except ValueError as exc:
            logger.warning("rejected malformed transaction: %s", exc)
            return TransactionResult(ok=False, error=f"malformed transaction: {exc}")

        if self.config.require_signatures:
            ok, err = verify_transaction_signature(tx, chain_id=self.config.chain_id)
            if not ok:
                logger.warning("rejected %s: %s", instruction.kind.value, err)
                return TransactionResult(ok=False, error=err)

        if instruction.signer != instruction.authority:
            logger.warning(
                "rejected %s: signer %s is not %s",
                instruction.kind.value,
                instruction.signer,
                instruction.authority,
            )
            return TransactionResult(ok=False, error="signer does not match the instruction's authority")

        expected = self.nonces.expected(instruction.signer)
        if instruction.nonce != expected:
            logger.warning(
                "rejected %s: nonce %s from %s, expected %s",
                instruction.kind.value,
                instruction.nonce,
                instruction.signer,
                expected,
            )
            return TransactionResult(ok=False, error=f"nonce invalid: expected {expected}, got {instruction.nonce}")

        try:
            value = self._dispatch(instruction)
        except AmmError as exc:
            logger.warning("rejected %s: %s", instruction.kind.value, exc)
            return TransactionResult(ok=False, error=str(exc), code=exc.code)
        except (CustodyError, TypeError) as exc:
            logger.warning("rejected %s: %s", instruction.kind.value, exc)
            return TransactionResult(ok=False, error=f"{type(exc).__name__}: {exc}")
        self.nonces.set_last(instruction.signer, instruction.nonce)
        return TransactionResult(ok=True, value=value)
