"""
EVM wire encoder
"""

import logging
from typing import Optional

from ...errors import TransactionFailed
from ...infra.evm_signer import EVMTransactionSender, GasPriceSource
from ...types import EVMTransaction, EvmNetwork, Token, TransferRequest
from ...types.evm_tokens import UINT256_MAX
from ..base import WireEncoder
from .calldata import (
    NATIVE_AS_ERC20_REASON,
    encode_erc20_transfer,
    encode_native_transfer,
    validate_address,
)

logger = logging.getLogger(__name__)


class EvmWireEncoder(WireEncoder):
    """
    Builds EIP-1559 descriptors for native and ERC-20 transfers

    Usage:
        encoder = EvmWireEncoder(EvmRpc(), signer)
        tx = encoder.build(request)
        tx_hash = encoder.submit(request, tx)
    """

    name = "evm"
    max_amount = UINT256_MAX

    def __init__(self, gas_price_source: GasPriceSource, sender: Optional[EVMTransactionSender] = None):
        self._gas = gas_price_source
        self._sender = sender

    def _check_request(self, request: TransferRequest) -> Token:
        if not isinstance(request.selector, EvmNetwork):
            raise TransactionFailed(f"EVM encoder cannot handle {type(request.selector).__name__}")
        if not isinstance(request.token, Token):
            raise TransactionFailed(f"Token {request.token} is not an EVM token")
        validate_address(request.wallet.address, "sender")
        validate_address(request.recipient, "recipient")
        return request.token

    def build_native_transfer(self, request: TransferRequest) -> EVMTransaction:
        self._check_request(request)
        value = self.parse_amount(request)

        gas_price = self._gas.gas_price(request.selector.chain_id)
        return encode_native_transfer(request.wallet.address, request.recipient, value, gas_price)

    def build_erc20_transfer(self, request: TransferRequest) -> EVMTransaction:
        """
        Raises:
            TransactionFailed: Token has no contract address (checked
                before the gas price is fetched)
        """
        token = self._check_request(request)
        if token.contract_address is None:
            raise TransactionFailed(NATIVE_AS_ERC20_REASON)
        validate_address(token.contract_address, "token contract")
        amount = self.parse_amount(request)

        gas_price = self._gas.gas_price(request.selector.chain_id)
        return encode_erc20_transfer(
            request.wallet.address,
            token.contract_address,
            request.recipient,
            amount,
            gas_price,
        )

    def build(self, request: TransferRequest) -> EVMTransaction:
        if request.token.is_native:
            return self.build_native_transfer(request)
        return self.build_erc20_transfer(request)

    def submit(self, request: TransferRequest, payload: EVMTransaction) -> str:
        chain_id = request.selector.chain_id
        logger.debug(f"Submitting EVM transaction to {payload.to} on chain {chain_id}")
        return self._sender.send_transaction(request.wallet, payload, chain_id)
