"""Error taxonomy of the AMM core.

Every error is local, synchronous and non-retryable: it aborts the whole
operation with no partial effect. Each subclass carries its `ErrorCode`.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    INVALID_TOKEN_MINT = "InvalidTokenMint"
    INVALID_TOKEN_OWNER = "InvalidTokenOwner"
    ZERO_LIQUIDITY_INPUT = "ZeroLiquidityInput"
    MATH_OVERFLOW = "MathOverflow"
    ZERO_LP_MINT = "ZeroLpMint"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_SWAP_DIRECTION = "InvalidSwapDirection"
    SLIPPAGE_EXCEEDED = "SlippageExceeded"
    POOL_ACCOUNT_MISMATCH = "PoolAccountMismatch"


_MESSAGES = {
    ErrorCode.INVALID_TOKEN_MINT: "The token account does not match the required mint",
    ErrorCode.INVALID_TOKEN_OWNER: "The token account is not owned by the user",
    ErrorCode.ZERO_LIQUIDITY_INPUT: "Cannot add liquidity with zero amount for one of the tokens",
    ErrorCode.MATH_OVERFLOW: "Math overflow",
    ErrorCode.ZERO_LP_MINT: "Resulting LP amount is zero",
    ErrorCode.INVALID_AMOUNT: "Invalid amount",
    ErrorCode.INVALID_SWAP_DIRECTION: "Input and output tokens must differ",
    ErrorCode.SLIPPAGE_EXCEEDED: "Output below slippage tolerance",
    ErrorCode.POOL_ACCOUNT_MISMATCH: "Presented accounts do not belong to this pool",
}


class AmmError(Exception):
    """Base class; `code` identifies the error kind."""

    code: ErrorCode

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = _MESSAGES[self.code]
        super().__init__(f"{message}: {detail}" if detail else message)


class InvalidTokenMint(AmmError):
    code = ErrorCode.INVALID_TOKEN_MINT


class InvalidTokenOwner(AmmError):
    code = ErrorCode.INVALID_TOKEN_OWNER


class ZeroLiquidityInput(AmmError):
    code = ErrorCode.ZERO_LIQUIDITY_INPUT


class MathOverflow(AmmError):
    code = ErrorCode.MATH_OVERFLOW


class ZeroLpMint(AmmError):
    code = ErrorCode.ZERO_LP_MINT


class InvalidAmount(AmmError):
    code = ErrorCode.INVALID_AMOUNT


class InvalidSwapDirection(AmmError):
    code = ErrorCode.INVALID_SWAP_DIRECTION


class SlippageExceeded(AmmError):
    code = ErrorCode.SLIPPAGE_EXCEEDED


class PoolAccountMismatch(AmmError):
    code = ErrorCode.POOL_ACCOUNT_MISMATCH
