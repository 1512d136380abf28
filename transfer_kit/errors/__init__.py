"""
Error definitions for Transfer Kit
"""

from .exceptions import (
    ErrorCode,
    TransferKitError,
    RpcError,
    MalformedResponse,
    InvalidAmount,
    InvalidAddress,
    InvalidCharacter,
    NotAuthenticated,
    TransactionFailed,
    SignerError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "TransferKitError",
    "RpcError",
    "MalformedResponse",
    "InvalidAmount",
    "InvalidAddress",
    "InvalidCharacter",
    "NotAuthenticated",
    "TransactionFailed",
    "SignerError",
    "ConfigurationError",
]
