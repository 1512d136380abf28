"""
Transfer Module

Top-level entry point for sending native assets and tokens.
"""

import logging

from ..errors import (
    ConfigurationError,
    InvalidAddress,
    InvalidAmount,
    SignerError,
    TransactionFailed,
)
from ..infra.correlation import CorrelationContext, log_with_correlation
from ..protocols import EncoderRegistry
from ..types import RawTransactionPayload, TransferRequest

logger = logging.getLogger(__name__)

# Raised as-is: they describe the request, not the network
_VALIDATION_ERRORS = (InvalidAmount, InvalidAddress, TransactionFailed, ConfigurationError)


class TransferOrchestrator:
    """
    Build and submit transfers

    The encoder is chosen once from the request's chain selector. Native
    tokens take the native path, everything else the token path (ERC-20
    or SPL). Nothing is retried; every failure reaches the caller.

    Usage:
        orchestrator = TransferOrchestrator(registry)
        tx_id = orchestrator.send(TransferRequest(
            wallet=wallet,
            token=Token.native(1),
            recipient="0x...",
            amount="0.01",
            selector=EvmNetwork(1),
        ))
    """

    def __init__(self, registry: EncoderRegistry):
        self._registry = registry

    def _check_family(self, request: TransferRequest):
        if request.selector.family != request.wallet.chain:
            raise TransactionFailed(
                f"Wallet chain {request.wallet.chain.value} does not match "
                f"selected network {request.selector.family.value}"
            )

    def build(self, request: TransferRequest) -> RawTransactionPayload:
        """
        Build the unsigned payload without submitting it

        Raises:
            InvalidAmount / InvalidAddress: Bad input (before any network call)
            TransactionFailed: Business-rule violation, or fetching network
                context (gas price, blockhash) failed
        """
        self._check_family(request)
        encoder = self._registry.for_selector(request.selector)
        try:
            return encoder.build(request)
        except _VALIDATION_ERRORS:
            raise
        except Exception as e:
            raise TransactionFailed(
                f"Failed to build transaction: {e}", original_error=e
            ) from e

    def send(self, request: TransferRequest) -> str:
        """
        Build the payload and hand it to the signing collaborator

        Returns:
            Transaction hash (EVM) or signature (Solana), unchanged

        Raises:
            SignerError: No signing collaborator for the chain family
            InvalidAmount / InvalidAddress: Bad input (before any network call)
            TransactionFailed: Business-rule violation, network or signing
                failure (original error attached)
        """
        operation = f"send_{'native' if request.token.is_native else 'token'}"
        with CorrelationContext(request.selector.family.value.lower()):
            log_with_correlation(
                logging.INFO,
                f"{request.amount} {request.token.symbol} -> {request.recipient}",
                operation,
            )

            self._check_family(request)
            encoder = self._registry.for_selector(request.selector)
            if not encoder.can_submit:
                raise SignerError.not_configured(request.selector.family.value)

            payload = self.build(request)
            try:
                tx_id = encoder.submit(request, payload)
            except TransactionFailed:
                raise
            except Exception as e:
                log_with_correlation(logging.ERROR, f"Submission failed: {e}", operation)
                raise TransactionFailed.send_failed(e) from e

            log_with_correlation(logging.INFO, f"Submitted: {tx_id}", operation)
            return tx_id
