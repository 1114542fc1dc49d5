"""
In-memory reference ledger.

Implements both collaborator contracts (`TokenCustody`, `RecordStore`) over plain
dicts of immutable records. `transaction()` snapshots the three tables and
restores them if the block raises, which gives each AMM operation the
all-or-nothing behavior the surrounding environment is expected to provide.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, Iterator, Optional

from ..kernels.python.checked_math import U64_MAX, is_u64
from ..state.accounts import Address, Amount, AssetId, MintInfo, TokenAccountInfo
from ..state.canonical import canonical_hex_allow_0x, domain_sep_bytes, sha256_hex
from .errors import (
    AccountNotFound,
    CustodyOverflow,
    DecimalsMismatch,
    InsufficientFunds,
    MintMismatch,
    OwnerMismatch,
    RecordAlreadyExists,
    RecordSizeMismatch,
)
from .interface import Authority


logger = logging.getLogger(__name__)


def _require_amount(amount: Amount) -> None:
    if not is_u64(amount):
        raise ValueError(f"amount must be a u64: {amount!r}")


def associated_token_address(owner: Address, mint: AssetId) -> Address:
    """Deterministic token account address for (owner, mint)."""
    owner_norm = canonical_hex_allow_0x(owner, name="owner")
    mint_norm = canonical_hex_allow_0x(mint, name="mint", nbytes=32)
    data = (
        domain_sep_bytes("associated_token_account")
        + bytes.fromhex(owner_norm[2:])
        + bytes.fromhex(mint_norm[2:])
    )
    return sha256_hex(data)


class InMemoryLedger:
    """
    Mints, token accounts and raw records keyed by address.

    Notes:
    - One address space: an address holds at most one mint, account or record.
    - Records are opaque bytes with a size fixed at allocation.
    """

    def __init__(self) -> None:
        self._mints: Dict[Address, MintInfo] = {}
        self._accounts: Dict[Address, TokenAccountInfo] = {}
        self._records: Dict[Address, bytes] = {}
        self._depth = 0

    # ------------------------------------------------------------------ atomicity

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run a block atomically: on any exception every table is restored.

        Nested blocks roll back only their own changes.
        """
        # Values are immutable, so shallow copies are complete snapshots.
        snapshot = (dict(self._mints), dict(self._accounts), dict(self._records))
        self._depth += 1
        try:
            yield
        except BaseException:
            self._mints, self._accounts, self._records = snapshot
            logger.debug("ledger transaction rolled back (depth=%s)", self._depth)
            raise
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------ reads

    def _require_unused(self, address: Address) -> None:
        if address in self._mints or address in self._accounts or address in self._records:
            raise RecordAlreadyExists(f"address already in use: {address}")

    def get_mint(self, address: Address) -> MintInfo:
        try:
            return self._mints[address]
        except KeyError:
            raise AccountNotFound(f"mint not found: {address}") from None

    def get_token_account(self, address: Address) -> TokenAccountInfo:
        try:
            return self._accounts[address]
        except KeyError:
            raise AccountNotFound(f"token account not found: {address}") from None

    def balance(self, address: Address) -> Amount:
        return self.get_token_account(address).amount

    # ------------------------------------------------------------------ allocation

    def create_mint(
        self,
        address: Address,
        *,
        decimals: int,
        mint_authority: Optional[Address],
    ) -> MintInfo:
        address = canonical_hex_allow_0x(address, name="mint", nbytes=32)
        self._require_unused(address)
        mint = MintInfo(address=address, decimals=decimals, supply=0, mint_authority=mint_authority)
        self._mints[address] = mint
        logger.debug("created mint %s (decimals=%s)", address, decimals)
        return mint

    def create_token_account(self, address: Address, *, mint: AssetId, owner: Address) -> TokenAccountInfo:
        address = canonical_hex_allow_0x(address, name="token_account")
        self._require_unused(address)
        self.get_mint(mint)
        account = TokenAccountInfo(address=address, mint=mint, owner=owner, amount=0)
        self._accounts[address] = account
        logger.debug("created token account %s (mint=%s owner=%s)", address, mint, owner)
        return account

    def get_or_create_associated_token_account(self, *, owner: Address, mint: AssetId) -> TokenAccountInfo:
        address = associated_token_address(owner, mint)
        existing = self._accounts.get(address)
        if existing is not None:
            return existing
        return self.create_token_account(address, mint=mint, owner=owner)

    # ------------------------------------------------------------------ movement

    def transfer_checked(
        self,
        *,
        source: Address,
        destination: Address,
        mint: AssetId,
        amount: Amount,
        decimals: int,
        authority: Authority,
    ) -> None:
        _require_amount(amount)
        mint_info = self.get_mint(mint)
        src = self.get_token_account(source)
        dst = self.get_token_account(destination)
        if src.mint != mint or dst.mint != mint:
            raise MintMismatch(f"transfer accounts do not hold mint {mint}")
        if decimals != mint_info.decimals:
            raise DecimalsMismatch(f"declared decimals {decimals} != mint decimals {mint_info.decimals}")
        if authority.address != src.owner:
            raise OwnerMismatch(f"authority {authority.address} does not control {source}")
        if src.amount < amount:
            raise InsufficientFunds(f"insufficient funds in {source}: {src.amount} < {amount}")
        if source == destination:
            return
        if dst.amount + amount > U64_MAX:
            raise CustodyOverflow(f"balance overflow in {destination}")
        self._accounts[source] = replace(src, amount=src.amount - amount)
        self._accounts[destination] = replace(dst, amount=dst.amount + amount)

    def mint_to(self, *, mint: AssetId, destination: Address, amount: Amount, authority: Authority) -> None:
        _require_amount(amount)
        mint_info = self.get_mint(mint)
        dst = self.get_token_account(destination)
        if dst.mint != mint:
            raise MintMismatch(f"{destination} does not hold mint {mint}")
        if mint_info.mint_authority is None or authority.address != mint_info.mint_authority:
            raise OwnerMismatch(f"authority {authority.address} cannot mint {mint}")
        if mint_info.supply + amount > U64_MAX or dst.amount + amount > U64_MAX:
            raise CustodyOverflow(f"supply overflow minting {mint}")
        self._mints[mint] = replace(mint_info, supply=mint_info.supply + amount)
        self._accounts[destination] = replace(dst, amount=dst.amount + amount)

    def burn_checked(
        self,
        *,
        mint: AssetId,
        account: Address,
        amount: Amount,
        decimals: int,
        authority: Authority,
    ) -> None:
        _require_amount(amount)
        mint_info = self.get_mint(mint)
        src = self.get_token_account(account)
        if src.mint != mint:
            raise MintMismatch(f"{account} does not hold mint {mint}")
        if decimals != mint_info.decimals:
            raise DecimalsMismatch(f"declared decimals {decimals} != mint decimals {mint_info.decimals}")
        if authority.address != src.owner:
            raise OwnerMismatch(f"authority {authority.address} does not control {account}")
        if src.amount < amount:
            raise InsufficientFunds(f"insufficient funds in {account}: {src.amount} < {amount}")
        self._mints[mint] = replace(mint_info, supply=mint_info.supply - amount)
        self._accounts[account] = replace(src, amount=src.amount - amount)

    # ------------------------------------------------------------------ records

    def allocate_record(self, address: Address, data: bytes) -> None:
        self._require_unused(address)
        self._records[address] = bytes(data)
        logger.debug("allocated record %s (%s bytes)", address, len(data))

    def load_record(self, address: Address) -> bytes:
        try:
            return self._records[address]
        except KeyError:
            raise AccountNotFound(f"record not found: {address}") from None

    def store_record(self, address: Address, data: bytes) -> None:
        current = self.load_record(address)
        if len(current) != len(data):
            raise RecordSizeMismatch(f"record {address} is {len(current)} bytes, got {len(data)}")
        self._records[address] = bytes(data)

    def __repr__(self) -> str:
        return (
            f"InMemoryLedger({len(self._mints)} mints, {len(self._accounts)} accounts, "
            f"{len(self._records)} records)"
        )
