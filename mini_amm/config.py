"""
AMM configuration.

`AmmConfig` is a frozen dataclass validated on construction. Deployments may
load it from YAML:

    program_id: "0x..."
    lp_mint_decimals: 9
    fee_numerator: 997
    fee_denominator: 1000
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from .kernels.python.cpmm_swap import FEE_DENOMINATOR, FEE_NUMERATOR, validate_fee
from .state.canonical import canonical_hex_allow_0x, domain_sep_bytes, sha256_hex


DEFAULT_PROGRAM_ID = sha256_hex(domain_sep_bytes("program_id"))
DEFAULT_LP_MINT_DECIMALS = 9


@dataclass(frozen=True)
class AmmConfig:
    """Runtime config for the AMM core."""

    program_id: str = DEFAULT_PROGRAM_ID
    lp_mint_decimals: int = DEFAULT_LP_MINT_DECIMALS
    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "program_id", canonical_hex_allow_0x(self.program_id, name="program_id", nbytes=32))
        if not isinstance(self.lp_mint_decimals, int) or isinstance(self.lp_mint_decimals, bool):
            raise TypeError("lp_mint_decimals must be an int")
        if not (0 <= self.lp_mint_decimals <= 255):
            raise ValueError(f"lp_mint_decimals must be in [0, 255]: {self.lp_mint_decimals}")
        validate_fee(self.fee_numerator, self.fee_denominator)


def config_from_mapping(obj: Mapping[str, Any]) -> AmmConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("config must be a mapping")
    known = {f.name for f in fields(AmmConfig)}
    unknown = sorted(set(obj.keys()) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {unknown}")
    return AmmConfig(**dict(obj))


def load_config(path: Union[str, Path]) -> AmmConfig:
    """Load an `AmmConfig` from a YAML file; an empty file yields the defaults."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return AmmConfig()
    return config_from_mapping(obj)
