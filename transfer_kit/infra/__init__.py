"""
Infrastructure layer for Transfer Kit

Provides:
- RpcClient: Solana JSON-RPC wrapper with retry logic
- BalancesApiClient: indexed balances API over httpx
- Session / StaticSession: bearer token source
- EvmRpc / LocalEVMSigner: EVM node access and local signing (web3.py)
- LocalSolanaSigner: Solana keypair signing (solders)
- CorrelationContext: correlation ids for transfer logs
"""

from .rpc import RpcClient, RpcClientConfig, ClusterRpcPool, parse_token_accounts
from .session import Session, StaticSession
from .balances_api import BalancesApiClient
from .correlation import CorrelationContext, get_correlation_id
from .evm_signer import (
    EVMTransactionSender,
    GasPriceSource,
    EvmRpc,
    LocalEVMSigner,
    create_web3,
)
from .solana_signer import SolanaTransactionSender, LocalSolanaSigner

__all__ = [
    # Solana RPC
    "RpcClient",
    "RpcClientConfig",
    "ClusterRpcPool",
    "parse_token_accounts",
    # Balances API
    "Session",
    "StaticSession",
    "BalancesApiClient",
    # Logging
    "CorrelationContext",
    "get_correlation_id",
    # EVM
    "EVMTransactionSender",
    "GasPriceSource",
    "EvmRpc",
    "LocalEVMSigner",
    "create_web3",
    # Solana signing
    "SolanaTransactionSender",
    "LocalSolanaSigner",
]
