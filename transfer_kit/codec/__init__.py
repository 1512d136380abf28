"""
Encoding helpers shared by the wire encoders

- units: decimal string <-> integer base units
- base58: fixed-width base58 decoding for Solana keys and blockhashes
"""

from . import base58
from .units import to_base_units, from_base_units

__all__ = [
    "base58",
    "to_base_units",
    "from_base_units",
]
