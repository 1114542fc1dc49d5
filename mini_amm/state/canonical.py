"""
Byte encodings shared by record discriminators, address derivation and
transaction signing.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any


_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _check_json_value(value: Any) -> None:
    # Amounts and nonces are ints; a float would make the digest depend on repr.
    if isinstance(value, float):
        raise TypeError("floats are not allowed in signed payloads")
    if isinstance(value, dict):
        if any(not isinstance(k, str) for k in value):
            raise TypeError("object keys must be str")
        for v in value.values():
            _check_json_value(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            _check_json_value(v)


def canonical_json_bytes(value: Any) -> bytes:
    """UTF-8 JSON with sorted keys and no whitespace."""
    _check_json_value(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode(
        "utf-8"
    )


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """
    Prefix `b"mini_amm:<label>:v<version>\\0"` for hashing under one purpose.

    The trailing NUL keeps the label from running into the payload.
    """
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label or not label.isascii():
        raise ValueError(f"label must be NUL-free ASCII: {label!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return f"mini_amm:{label}:v{version}".encode("ascii") + b"\x00"


def hex_to_bytes_fixed(hex_str: str, *, nbytes: int, name: str) -> bytes:
    """Decode a 0x-prefixed hex string of exactly `nbytes` bytes."""
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    body = hex_str[2:]
    if not hex_str.startswith("0x") or len(body) != 2 * nbytes or not _HEX_RE.fullmatch(body):
        raise ValueError(f"{name} must be a 0x-prefixed {nbytes}-byte hex string")
    return bytes.fromhex(body)


def canonical_hex_allow_0x(hex_str: str, *, name: str, nbytes: int | None = None) -> str:
    """Lowercase, 0x-prefixed form of `hex_str` (prefix optional on input)."""
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    body = hex_str.strip()
    if body[:2].lower() == "0x":
        body = body[2:]
    if not body or len(body) % 2 or not _HEX_RE.fullmatch(body):
        raise ValueError(f"{name} must be non-empty hex with an even number of chars")
    if nbytes is not None and len(body) != 2 * nbytes:
        raise ValueError(f"{name} must be {nbytes} bytes (hex length {2 * nbytes})")
    return "0x" + body.lower()
