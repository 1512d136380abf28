"""
Raw transaction payloads handed to the signing collaborators

Payloads are built per request, passed to the signer once and discarded.
"""

import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class EVMTransaction:
    """
    EIP-1559 transaction descriptor

    Attributes:
        from_address: Sender (wallet address)
        to: Recipient, or the token contract for ERC-20 transfers
        value: Native value in wei
        gas_limit: Gas limit
        max_fee_per_gas: Max fee per gas in wei
        max_priority_fee_per_gas: Priority fee per gas in wei
        data: Hex call data with 0x prefix (None for plain transfers)
    """
    from_address: str
    to: str
    value: int
    gas_limit: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    data: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Transaction dict using web3.py key names"""
        tx: Dict[str, Any] = {
            "from": self.from_address,
            "to": self.to,
            "value": self.value,
            "gas": self.gas_limit,
            "maxFeePerGas": self.max_fee_per_gas,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
        }
        if self.data is not None:
            tx["data"] = self.data
        return tx


@dataclass(frozen=True)
class SolanaTransaction:
    """
    Unsigned legacy Solana transaction in wire format, base64-encoded

    The single signature slot is zero-filled; the signer fills it in.
    """
    base64_transaction: str

    @classmethod
    def from_bytes(cls, raw: bytes) -> "SolanaTransaction":
        return cls(base64.b64encode(raw).decode("ascii"))

    @property
    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.base64_transaction)

    def __str__(self) -> str:
        return self.base64_transaction


RawTransactionPayload = Union[EVMTransaction, SolanaTransaction]
