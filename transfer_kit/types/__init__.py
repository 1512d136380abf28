"""
Type definitions for Transfer Kit
"""

from .common import (
    ChainFamily,
    SolanaCluster,
    EvmNetwork,
    SolanaNetwork,
    ChainSelector,
    Wallet,
    Token,
    SolanaToken,
    AnyToken,
    TransferRequest,
    format_ui_balance,
)
from .payload import EVMTransaction, SolanaTransaction, RawTransactionPayload
from .responses import (
    LatestBlockhash,
    ParsedTokenAccount,
    BalanceRecord,
    balance_from_rpc,
    format_raw_balance,
)
from .solana_tokens import (
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    NATIVE_SOL_MINT,
    KNOWN_SOLANA_MINTS,
    get_token_metadata,
)
from .evm_tokens import (
    ERC20_TRANSFER_SELECTOR,
    NATIVE_TRANSFER_GAS_LIMIT,
    ERC20_TRANSFER_GAS_LIMIT,
    get_native_token_info,
)

__all__ = [
    # Chain / wallet
    "ChainFamily",
    "SolanaCluster",
    "EvmNetwork",
    "SolanaNetwork",
    "ChainSelector",
    "Wallet",
    # Tokens
    "Token",
    "SolanaToken",
    "AnyToken",
    "TransferRequest",
    "format_ui_balance",
    # Payloads
    "EVMTransaction",
    "SolanaTransaction",
    "RawTransactionPayload",
    # Responses
    "LatestBlockhash",
    "ParsedTokenAccount",
    "BalanceRecord",
    "balance_from_rpc",
    "format_raw_balance",
    # Solana constants
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "NATIVE_SOL_MINT",
    "KNOWN_SOLANA_MINTS",
    "get_token_metadata",
    # EVM constants
    "ERC20_TRANSFER_SELECTOR",
    "NATIVE_TRANSFER_GAS_LIMIT",
    "ERC20_TRANSFER_GAS_LIMIT",
    "get_native_token_info",
]
