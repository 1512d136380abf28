"""
Base wire encoder interface

One encoder per chain family turns a TransferRequest into a raw payload
and hands that payload to the family's signing collaborator.
"""

from abc import ABC, abstractmethod

from ..codec import to_base_units
from ..errors import InvalidAmount
from ..types import RawTransactionPayload, TransferRequest


class WireEncoder(ABC):
    """
    Abstract base class for chain-family wire encoders

    Each encoder provides:
    - build(): validate the request and assemble the unsigned payload
    - submit(): pass the payload to the signing collaborator once

    Validation (amount, addresses, token kind) always happens before the
    first network call.
    """

    # Chain family name used in logs
    name: str = "base"

    # Largest amount representable on the wire
    max_amount: int = 0

    # Signing collaborator, None for build-only encoders
    _sender = None

    def parse_amount(self, request: TransferRequest) -> int:
        """
        Convert the request amount to base units and range-check it

        Raises:
            InvalidAmount: Malformed, zero, or too large for the wire format
        """
        amount = to_base_units(request.amount, request.token.decimals)
        if amount == 0:
            raise InvalidAmount.out_of_range(request.amount, "amount must be greater than zero")
        if amount > self.max_amount:
            raise InvalidAmount.out_of_range(request.amount, f"exceeds {self.name} maximum {self.max_amount}")
        return amount

    @property
    def can_submit(self) -> bool:
        """Whether a signing collaborator is attached"""
        return self._sender is not None

    @abstractmethod
    def build(self, request: TransferRequest) -> RawTransactionPayload:
        """
        Build the unsigned payload for a transfer

        Args:
            request: Transfer intent

        Returns:
            EVMTransaction or SolanaTransaction

        Raises:
            InvalidAmount: Bad amount
            InvalidAddress: Bad sender, recipient or token address
            TransactionFailed: Business-rule violation
        """
        ...

    @abstractmethod
    def submit(self, request: TransferRequest, payload: RawTransactionPayload) -> str:
        """
        Hand the payload to the signing collaborator (no retry)

        Returns:
            Transaction hash or signature, unchanged
        """
        ...
