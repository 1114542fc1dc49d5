"""
Collaborator contracts consumed by the core.

- `TokenCustody`: asset movement (checked transfer, mint, checked burn) and reads.
- `RecordStore`: allocation and persistence of fixed-size records.
- Authorities: who signs a custody call. `UserAuthority` stands for a caller whose
  signature was verified upstream; `ProgramAuthority` is the pool's own capability,
  re-derived from its seeds on every use so no key material exists for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ContextManager, Protocol, Sequence, Tuple, Union

from ..state.accounts import Address, Amount, AssetId, MintInfo, TokenAccountInfo
from ..state.pools import create_program_address


@dataclass(frozen=True)
class UserAuthority:
    address: Address


@dataclass(frozen=True)
class ProgramAuthority:
    program_id: Address
    seeds: Tuple[bytes, ...]
    bump: int

    @property
    def address(self) -> Address:
        return create_program_address(self.seeds, self.bump, self.program_id)


Authority = Union[UserAuthority, ProgramAuthority]


class TokenCustody(Protocol):
    def get_mint(self, address: Address) -> MintInfo:
        ...

    def get_token_account(self, address: Address) -> TokenAccountInfo:
        ...

    def create_mint(self, address: Address, *, decimals: int, mint_authority: Address) -> MintInfo:
        ...

    def create_token_account(self, address: Address, *, mint: AssetId, owner: Address) -> TokenAccountInfo:
        ...

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
        ...

    def mint_to(self, *, mint: AssetId, destination: Address, amount: Amount, authority: Authority) -> None:
        ...

    def burn_checked(
        self,
        *,
        mint: AssetId,
        account: Address,
        amount: Amount,
        decimals: int,
        authority: Authority,
    ) -> None:
        ...


class RecordStore(Protocol):
    def allocate_record(self, address: Address, data: bytes) -> None:
        ...

    def load_record(self, address: Address) -> bytes:
        ...

    def store_record(self, address: Address, data: bytes) -> None:
        ...


class Ledger(TokenCustody, RecordStore, Protocol):
    """Custody and record store served by one atomic environment."""

    def transaction(self) -> ContextManager[None]:
        ...


def signer_for(program_id: Address, seeds: Sequence[bytes], bump: int) -> ProgramAuthority:
    return ProgramAuthority(program_id=program_id, seeds=tuple(bytes(s) for s in seeds), bump=bump)
