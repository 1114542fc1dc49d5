"""
State records for the mini AMM
"""

from .accounts import Address, Amount, AssetId, MintInfo, TokenAccountInfo
from .nonces import NonceTable
from .pools import PoolAddresses, PoolState, canonical_pair, derive_pool_addresses

__all__ = [
    "Address",
    "Amount",
    "AssetId",
    "MintInfo",
    "TokenAccountInfo",
    "NonceTable",
    "PoolAddresses",
    "PoolState",
    "canonical_pair",
    "derive_pool_addresses",
]
