"""
Core AMM operations
"""

from .accounts import (
    AddLiquidityAccounts,
    InitializePoolAccounts,
    PoolAccounts,
    RemoveLiquidityAccounts,
    SwapAccounts,
)
from .cpmm import compute_lp_burn, compute_lp_mint, swap_exact_in
from .errors import (
    AmmError,
    ErrorCode,
    InvalidAmount,
    InvalidSwapDirection,
    InvalidTokenMint,
    InvalidTokenOwner,
    MathOverflow,
    PoolAccountMismatch,
    SlippageExceeded,
    ZeroLiquidityInput,
    ZeroLpMint,
)
from .liquidity import (
    LiquidityDeposit,
    LiquidityWithdrawal,
    add_liquidity,
    initialize_pool,
    remove_liquidity,
)
from .quotes import (
    PoolInfo,
    SwapQuote,
    get_pool_info,
    min_amount_out,
    quote_add_liquidity,
    quote_remove_liquidity,
    quote_swap,
)
from .swap import SwapDirection, SwapExecution, swap

__all__ = [
    "AddLiquidityAccounts",
    "InitializePoolAccounts",
    "PoolAccounts",
    "RemoveLiquidityAccounts",
    "SwapAccounts",
    "compute_lp_burn",
    "compute_lp_mint",
    "swap_exact_in",
    "AmmError",
    "ErrorCode",
    "InvalidAmount",
    "InvalidSwapDirection",
    "InvalidTokenMint",
    "InvalidTokenOwner",
    "MathOverflow",
    "PoolAccountMismatch",
    "SlippageExceeded",
    "ZeroLiquidityInput",
    "ZeroLpMint",
    "LiquidityDeposit",
    "LiquidityWithdrawal",
    "add_liquidity",
    "initialize_pool",
    "remove_liquidity",
    "PoolInfo",
    "SwapQuote",
    "get_pool_info",
    "min_amount_out",
    "quote_add_liquidity",
    "quote_remove_liquidity",
    "quote_swap",
    "SwapDirection",
    "SwapExecution",
    "swap",
]
