"""
Solana wire encoding (native SOL and SPL token transfers)
"""

from .wire import (
    build_native_transfer,
    build_spl_transfer,
    decode_pubkey,
    get_associated_token_address,
    system_transfer_data,
    spl_transfer_data,
)
from .encoder import SolanaWireEncoder

__all__ = [
    "build_native_transfer",
    "build_spl_transfer",
    "decode_pubkey",
    "get_associated_token_address",
    "system_transfer_data",
    "spl_transfer_data",
    "SolanaWireEncoder",
]
