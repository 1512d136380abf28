"""
EVM wire encoding (native and ERC-20 transfers)
"""

from .calldata import (
    encode_erc20_transfer_calldata,
    encode_native_transfer,
    encode_erc20_transfer,
    validate_address,
)
from .encoder import EvmWireEncoder

__all__ = [
    "encode_erc20_transfer_calldata",
    "encode_native_transfer",
    "encode_erc20_transfer",
    "validate_address",
    "EvmWireEncoder",
]
