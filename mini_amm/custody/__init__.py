"""
Custody collaborator: contracts the core calls into, plus a reference ledger.
"""

from .errors import (
    AccountNotFound,
    CustodyError,
    CustodyOverflow,
    DecimalsMismatch,
    InsufficientFunds,
    MintMismatch,
    OwnerMismatch,
    RecordAlreadyExists,
    RecordSizeMismatch,
)
from .interface import Authority, Ledger, ProgramAuthority, RecordStore, TokenCustody, UserAuthority, signer_for
from .memory import InMemoryLedger, associated_token_address

__all__ = [
    "AccountNotFound",
    "CustodyError",
    "CustodyOverflow",
    "DecimalsMismatch",
    "InsufficientFunds",
    "MintMismatch",
    "OwnerMismatch",
    "RecordAlreadyExists",
    "RecordSizeMismatch",
    "Authority",
    "Ledger",
    "ProgramAuthority",
    "RecordStore",
    "TokenCustody",
    "UserAuthority",
    "signer_for",
    "InMemoryLedger",
    "associated_token_address",
]
