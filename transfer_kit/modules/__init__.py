"""
Functional modules for TransferClient

Provides high-level operations:
- BalanceResolver: token balances with Solana RPC fallback
- TransferOrchestrator: native and token transfers
"""

from .balances import BalanceResolver
from .transfer import TransferOrchestrator

__all__ = [
    "BalanceResolver",
    "TransferOrchestrator",
]
