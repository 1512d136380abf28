"""
Transfer Kit - Chain-agnostic transfer building and balance resolution

Turns "send X of token T to address A on chain C" into:
- an EIP-1559 descriptor (native or ERC-20) for an EVM signer
- an unsigned legacy Solana wire transaction (native SOL or SPL)

and resolves wallet balances from an indexed API with a Solana JSON-RPC
fallback.
"""

from .client import TransferClient
from .types import (
    ChainFamily,
    SolanaCluster,
    EvmNetwork,
    SolanaNetwork,
    Wallet,
    Token,
    SolanaToken,
    TransferRequest,
    EVMTransaction,
    SolanaTransaction,
)
from .errors import (
    TransferKitError,
    InvalidAmount,
    InvalidAddress,
    InvalidCharacter,
    NotAuthenticated,
    TransactionFailed,
    MalformedResponse,
    RpcError,
    SignerError,
    ConfigurationError,
    ErrorCode,
)
from .codec import to_base_units, from_base_units
from .infra import StaticSession, LocalEVMSigner, LocalSolanaSigner, EvmRpc, RpcClient
from .modules import BalanceResolver, TransferOrchestrator

__version__ = "0.1.0"

__all__ = [
    # Client
    "TransferClient",
    # Types
    "ChainFamily",
    "SolanaCluster",
    "EvmNetwork",
    "SolanaNetwork",
    "Wallet",
    "Token",
    "SolanaToken",
    "TransferRequest",
    "EVMTransaction",
    "SolanaTransaction",
    # Errors
    "TransferKitError",
    "InvalidAmount",
    "InvalidAddress",
    "InvalidCharacter",
    "NotAuthenticated",
    "TransactionFailed",
    "MalformedResponse",
    "RpcError",
    "SignerError",
    "ConfigurationError",
    "ErrorCode",
    # Codec
    "to_base_units",
    "from_base_units",
    # Infrastructure
    "StaticSession",
    "LocalEVMSigner",
    "LocalSolanaSigner",
    "EvmRpc",
    "RpcClient",
    # Modules
    "BalanceResolver",
    "TransferOrchestrator",
]
