"""
Per-signer transaction nonces.

The program accepts a signer's transactions strictly in sequence: the next
nonce is always the last committed one plus one, starting at 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..kernels.python.checked_math import is_u64
from .accounts import Address
from .canonical import canonical_hex_allow_0x


@dataclass
class NonceTable:
    """Mutable mapping: signer address -> last committed nonce (0 when unseen)."""

    _last: Dict[Address, int] = field(default_factory=dict)

    def get_last(self, signer: Address) -> int:
        return self._last.get(canonical_hex_allow_0x(signer, name="signer"), 0)

    def expected(self, signer: Address) -> int:
        return self.get_last(signer) + 1

    def set_last(self, signer: Address, last_nonce: int) -> None:
        if not is_u64(last_nonce):
            raise TypeError("last_nonce must be a u64 int")
        key = canonical_hex_allow_0x(signer, name="signer")
        if last_nonce <= self._last.get(key, 0):
            raise ValueError(f"nonce for {key} must increase: {last_nonce}")
        self._last[key] = last_nonce

    def get_all(self) -> Mapping[Address, int]:
        return dict(self._last)
