"""
Token ledger records: mints and token accounts.

Implements the read model that the core observes through the custody
collaborator. Records are immutable; the ledger replaces them on mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..kernels.python.checked_math import is_u64


# Type aliases
Address = str  # 0x-prefixed lowercase hex (32 bytes for records, 48 bytes for BLS wallet keys)
AssetId = str  # address of an asset's mint record
Amount = int  # u64 token quantity


@dataclass(frozen=True)
class MintInfo:
    """
    Issuance record of one fungible asset.

    Attributes:
        address: Mint address (the asset identity)
        decimals: Configured decimal precision
        supply: Total units in circulation
        mint_authority: Address allowed to mint (None when minting is disabled)
    """
    address: Address
    decimals: int
    supply: Amount
    mint_authority: Optional[Address]

    def __post_init__(self) -> None:
        if not isinstance(self.decimals, int) or isinstance(self.decimals, bool):
            raise TypeError("decimals must be an int")
        if not (0 <= self.decimals <= 255):
            raise ValueError(f"decimals must be in [0, 255]: {self.decimals}")
        if not is_u64(self.supply):
            raise ValueError(f"supply must be a u64: {self.supply}")


@dataclass(frozen=True)
class TokenAccountInfo:
    """
    Balance of one asset held by one controlling party.

    Attributes:
        address: Token account address
        mint: Asset identity held by this account
        owner: Controlling party (a wallet or a program-derived authority)
        amount: Current balance
    """
    address: Address
    mint: AssetId
    owner: Address
    amount: Amount

    def __post_init__(self) -> None:
        if not is_u64(self.amount):
            raise ValueError(f"amount must be a u64: {self.amount}")

    def __repr__(self) -> str:
        return (
            f"TokenAccountInfo(address={self.address[:10]}..., mint={self.mint[:10]}..., "
            f"owner={self.owner[:10]}..., amount={self.amount})"
        )
