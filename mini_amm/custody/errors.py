"""Exception types reported by the custody / record-store collaborator.

The core never catches these; they abort the surrounding transaction.
"""

from __future__ import annotations


class CustodyError(Exception):
    """Base class for collaborator-reported failures."""


class AccountNotFound(CustodyError):
    """Raised when an address has no mint, token account or record behind it."""


class RecordAlreadyExists(CustodyError):
    """Raised when allocating an address that is already in use."""


class RecordSizeMismatch(CustodyError):
    """Raised when a stored record would change its fixed size."""


class MintMismatch(CustodyError):
    """Raised when a token account does not hold the asset named by the call."""


class DecimalsMismatch(CustodyError):
    """Raised when the declared decimals differ from the mint's configured precision."""


class OwnerMismatch(CustodyError):
    """Raised when the signing authority does not control the debited account or mint."""


class InsufficientFunds(CustodyError):
    """Raised when a debit exceeds the account balance."""


class CustodyOverflow(CustodyError):
    """Raised when a credit would push a balance or supply past u64."""
