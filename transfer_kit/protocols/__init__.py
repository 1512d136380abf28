"""
Wire encoders per chain family
"""

from .base import WireEncoder
from .registry import EncoderRegistry
from .evm import EvmWireEncoder
from .solana import SolanaWireEncoder

__all__ = [
    "WireEncoder",
    "EncoderRegistry",
    "EvmWireEncoder",
    "SolanaWireEncoder",
]
