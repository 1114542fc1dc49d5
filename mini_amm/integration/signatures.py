"""
Caller signatures for transactions (BLS12-381, `py_ecc.bls.G2Basic`).

Signing scheme:
    msg_hash = SHA256( domain_sep(f"mini_amm_tx_sig:{chain_id}", v1)
                       || canonical_json_bytes({chain_id, signer, nonce, instruction, accounts, args}) )
    signature = G2Basic.Sign(sk, msg_hash)

The signer's 48-byte public key is the transaction's `signer` field, so a wallet
address doubles as its verification key. `chain_id` ties a signature to one
deployment; `signer` and `nonce` tie it to one slot in that signer's sequence,
which the program consumes on commit.
"""

from __future__ import annotations

import hashlib
from typing import Any, Dict, Mapping, Optional, Tuple

from py_ecc.bls import G2Basic

from ..state.canonical import canonical_json_bytes, domain_sep_bytes, hex_to_bytes_fixed


PUBKEY_BYTES = 48
SIGNATURE_BYTES = 96


def transaction_signing_dict(tx: Mapping[str, Any], *, chain_id: str) -> Dict[str, Any]:
    return {
        "chain_id": chain_id,
        "signer": tx["signer"],
        "nonce": tx["nonce"],
        "instruction": tx["instruction"],
        "accounts": tx["accounts"],
        "args": tx.get("args") or {},
    }


def transaction_signing_hash(tx: Mapping[str, Any], *, chain_id: str) -> bytes:
    payload = canonical_json_bytes(transaction_signing_dict(tx, chain_id=chain_id))
    return hashlib.sha256(domain_sep_bytes(f"mini_amm_tx_sig:{chain_id}", version=1) + payload).digest()


def bls_pubkey_hex(privkey: int) -> str:
    return "0x" + G2Basic.SkToPk(privkey).hex()


def sign_transaction(tx: Mapping[str, Any], *, privkey: int, chain_id: str) -> str:
    """Return the 0x-prefixed signature hex for `tx` under `privkey`."""
    if not isinstance(privkey, int) or isinstance(privkey, bool) or privkey <= 0:
        raise ValueError("privkey must be a positive int")
    sig = G2Basic.Sign(privkey, transaction_signing_hash(tx, chain_id=chain_id))
    return "0x" + sig.hex()


def verify_transaction_signature(tx: Mapping[str, Any], *, chain_id: str) -> Tuple[bool, Optional[str]]:
    """
    Verify `tx["signature"]` against the public key in `tx["signer"]`.

    Returns (ok, error); never raises for malformed key or signature material.
    """
    signature = tx.get("signature")
    if signature is None:
        return False, "missing signature"
    try:
        pubkey_bytes = hex_to_bytes_fixed(tx.get("signer"), nbytes=PUBKEY_BYTES, name="signer")
        sig_bytes = hex_to_bytes_fixed(signature, nbytes=SIGNATURE_BYTES, name="signature")
        msg_hash = transaction_signing_hash(tx, chain_id=chain_id)
    except (KeyError, TypeError, ValueError) as exc:
        return False, f"signature verification error: {exc}"
    if not G2Basic.Verify(pubkey_bytes, msg_hash, sig_bytes):
        return False, "invalid signature"
    return True, None
