"""
Transaction-level integration layer
"""

from .instructions import Instruction, InstructionKind, create_transaction, parse_transaction
from .program import MiniAmmProgram, ProgramConfig, TransactionResult
from .signatures import bls_pubkey_hex, sign_transaction, verify_transaction_signature

__all__ = [
    "Instruction",
    "InstructionKind",
    "create_transaction",
    "parse_transaction",
    "MiniAmmProgram",
    "ProgramConfig",
    "TransactionResult",
    "bls_pubkey_hex",
    "sign_transaction",
    "verify_transaction_signature",
]
