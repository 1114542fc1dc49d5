"""
Pool record state and deterministic address derivation.
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass
from typing import Sequence, Tuple

from .accounts import Address, Amount, AssetId
from .canonical import hex_to_bytes_fixed
from ..kernels.python.checked_math import is_u64


ADDRESS_BYTES = 32
MAX_BUMP = 255

SEED_POOL_ACCOUNT = b"pool"
SEED_LP_MINT_ACCOUNT = b"lp_mint"
SEED_VAULT_A_ACCOUNT = b"vault_a"
SEED_VAULT_B_ACCOUNT = b"vault_b"

_PDA_MARKER = b"ProgramDerivedAddress"

# 8-byte record discriminator followed by the fixed-size body.
POOL_DISCRIMINATOR = hashlib.sha256(b"account:Pool").digest()[:8]
_POOL_BODY = struct.Struct("<32s32s32sBQB")
POOL_RECORD_SIZE = len(POOL_DISCRIMINATOR) + _POOL_BODY.size


def address_bytes(address: Address, *, name: str = "address") -> bytes:
    return hex_to_bytes_fixed(address, nbytes=ADDRESS_BYTES, name=name)


def bytes_to_address(raw: bytes) -> Address:
    if len(raw) != ADDRESS_BYTES:
        raise ValueError(f"address must be {ADDRESS_BYTES} bytes, got {len(raw)}")
    return "0x" + raw.hex()


def create_program_address(seeds: Sequence[bytes], bump: int, program_id: Address) -> Address:
    """
    Derive the address owned by `program_id` for `seeds` + `bump`.

        address = sha256(seed_0 || ... || seed_n || bump || program_id || "ProgramDerivedAddress")
    """
    if not isinstance(bump, int) or isinstance(bump, bool) or not (0 <= bump <= MAX_BUMP):
        raise ValueError(f"bump must be in [0, {MAX_BUMP}]: {bump}")
    h = hashlib.sha256()
    for seed in seeds:
        if not isinstance(seed, (bytes, bytearray)):
            raise TypeError("seeds must be bytes")
        if len(seed) > ADDRESS_BYTES:
            raise ValueError(f"seed longer than {ADDRESS_BYTES} bytes")
        h.update(bytes(seed))
    h.update(bytes([bump]))
    h.update(address_bytes(program_id, name="program_id"))
    h.update(_PDA_MARKER)
    return bytes_to_address(h.digest())


def find_program_address(seeds: Sequence[bytes], program_id: Address) -> Tuple[Address, int]:
    """Derive with the canonical bump. Returns (address, bump)."""
    return create_program_address(seeds, MAX_BUMP, program_id), MAX_BUMP


def canonical_pair(mint_x: AssetId, mint_y: AssetId) -> Tuple[AssetId, AssetId]:
    """
    Order an unordered asset pair; the lexicographically lower mint is token A.
    """
    x = bytes_to_address(address_bytes(mint_x, name="mint_x"))
    y = bytes_to_address(address_bytes(mint_y, name="mint_y"))
    if x == y:
        raise ValueError(f"pair assets must differ: {x}")
    return (x, y) if x < y else (y, x)


def lp_mint_seeds(token_a_mint: AssetId, token_b_mint: AssetId) -> Tuple[bytes, ...]:
    return (
        SEED_LP_MINT_ACCOUNT,
        address_bytes(token_a_mint, name="token_a_mint"),
        address_bytes(token_b_mint, name="token_b_mint"),
    )


def pool_seeds(lp_mint: Address) -> Tuple[bytes, ...]:
    return (SEED_POOL_ACCOUNT, address_bytes(lp_mint, name="lp_mint"))


def vault_a_seeds(lp_mint: Address) -> Tuple[bytes, ...]:
    return (SEED_VAULT_A_ACCOUNT, address_bytes(lp_mint, name="lp_mint"))


def vault_b_seeds(lp_mint: Address) -> Tuple[bytes, ...]:
    return (SEED_VAULT_B_ACCOUNT, address_bytes(lp_mint, name="lp_mint"))


@dataclass(frozen=True)
class PoolAddresses:
    """
    All addresses derived for one asset pair.

    The claim mint is derived from the ordered pair, and everything else from the
    claim mint, so one pair maps to exactly one pool.
    """
    program_id: Address
    token_a_mint: AssetId
    token_b_mint: AssetId
    lp_mint: Address
    bump_lp_mint: int
    pool: Address
    bump: int
    token_a_vault: Address
    token_b_vault: Address


def derive_pool_addresses(program_id: Address, mint_x: AssetId, mint_y: AssetId) -> PoolAddresses:
    token_a_mint, token_b_mint = canonical_pair(mint_x, mint_y)
    lp_mint, bump_lp_mint = find_program_address(lp_mint_seeds(token_a_mint, token_b_mint), program_id)
    pool, bump = find_program_address(pool_seeds(lp_mint), program_id)
    token_a_vault, _ = find_program_address(vault_a_seeds(lp_mint), program_id)
    token_b_vault, _ = find_program_address(vault_b_seeds(lp_mint), program_id)
    return PoolAddresses(
        program_id=program_id,
        token_a_mint=token_a_mint,
        token_b_mint=token_b_mint,
        lp_mint=lp_mint,
        bump_lp_mint=bump_lp_mint,
        pool=pool,
        bump=bump,
        token_a_vault=token_a_vault,
        token_b_vault=token_b_vault,
    )


@dataclass(frozen=True)
class PoolState:
    """
    Persisted state of one trading pair.

    Attributes:
        token_a_vault: Custody account holding token A
        token_b_vault: Custody account holding token B
        lp_mint: Claim-token mint (its authority is the pool)
        bump: Bump of the pool's own derived address (signing capability)
        total_lp: Claim tokens in circulation, maintained alongside the mint supply
        bump_lp_mint: Bump of the claim-mint address derived from the asset pair
    """
    token_a_vault: Address
    token_b_vault: Address
    lp_mint: Address
    bump: int
    total_lp: Amount
    bump_lp_mint: int

    def __post_init__(self) -> None:
        """Validate record field domains."""
        for name in ("token_a_vault", "token_b_vault", "lp_mint"):
            address_bytes(getattr(self, name), name=name)
        if self.token_a_vault == self.token_b_vault:
            raise ValueError("vaults must be distinct")
        for name in ("bump", "bump_lp_mint"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool) or not (0 <= v <= MAX_BUMP):
                raise ValueError(f"{name} must be in [0, {MAX_BUMP}]: {v}")
        if not is_u64(self.total_lp):
            raise ValueError(f"total_lp must be a u64: {self.total_lp}")

    @classmethod
    def new(cls, addresses: PoolAddresses) -> "PoolState":
        return cls(
            token_a_vault=addresses.token_a_vault,
            token_b_vault=addresses.token_b_vault,
            lp_mint=addresses.lp_mint,
            bump=addresses.bump,
            total_lp=0,
            bump_lp_mint=addresses.bump_lp_mint,
        )

    def encode(self) -> bytes:
        """Fixed-size little-endian layout (POOL_RECORD_SIZE bytes)."""
        return POOL_DISCRIMINATOR + _POOL_BODY.pack(
            address_bytes(self.token_a_vault),
            address_bytes(self.token_b_vault),
            address_bytes(self.lp_mint),
            self.bump,
            self.total_lp,
            self.bump_lp_mint,
        )

    @classmethod
    def decode(cls, data: bytes) -> "PoolState":
        if len(data) != POOL_RECORD_SIZE:
            raise ValueError(f"pool record must be {POOL_RECORD_SIZE} bytes, got {len(data)}")
        if data[: len(POOL_DISCRIMINATOR)] != POOL_DISCRIMINATOR:
            raise ValueError("pool record discriminator mismatch")
        vault_a, vault_b, lp_mint, bump, total_lp, bump_lp_mint = _POOL_BODY.unpack(
            data[len(POOL_DISCRIMINATOR):]
        )
        return cls(
            token_a_vault=bytes_to_address(vault_a),
            token_b_vault=bytes_to_address(vault_b),
            lp_mint=bytes_to_address(lp_mint),
            bump=bump,
            total_lp=total_lp,
            bump_lp_mint=bump_lp_mint,
        )

    def __repr__(self) -> str:
        return (
            f"PoolState(lp_mint={self.lp_mint[:10]}..., "
            f"vaults=({self.token_a_vault[:10]}..., {self.token_b_vault[:10]}...), "
            f"total_lp={self.total_lp})"
        )
