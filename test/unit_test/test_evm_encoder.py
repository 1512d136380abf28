"""
EVM Wire Encoder Unit Tests

Tests ERC-20 call data, fee heuristics and request validation.
eth-abi is used as an independent reference for the call data.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from eth_abi import encode as abi_encode

from transfer_kit.errors import InvalidAddress, InvalidAmount, TransactionFailed
from transfer_kit.protocols.evm import (
    EvmWireEncoder,
    encode_erc20_transfer,
    encode_erc20_transfer_calldata,
    encode_native_transfer,
)
from transfer_kit.types import (
    EVMTransaction,
    EvmNetwork,
    SolanaNetwork,
    SolanaToken,
    Token,
    TransferRequest,
    Wallet,
)


SENDER = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
RECIPIENT = "0x8ba1f109551bD432803012645Ac136ddd64DBA72"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def make_usdc(chain_id: int = 1) -> Token:
    return Token(
        id=USDC,
        symbol="USDC",
        name="USD Coin",
        decimals=6,
        contract_address=USDC,
        chain_id=chain_id,
        balance="5000000",
    )


class TestErc20Calldata:
    """Tests for encode_erc20_transfer_calldata"""

    def test_minimal_transfer(self):
        to = "0x" + "0" * 39 + "1"
        data = encode_erc20_transfer_calldata(to, 1)

        expected = "0x" + "a9059cbb" + "00" * 31 + "01" + "00" * 31 + "01"
        assert data == expected
        assert len(data) == 2 + 8 + 64 + 64

    def test_matches_abi_encoding(self):
        amount = 1_234_567_890_123
        data = encode_erc20_transfer_calldata(RECIPIENT, amount)

        expected = "0xa9059cbb" + abi_encode(["address", "uint256"], [RECIPIENT.lower(), amount]).hex()
        assert data == expected

    def test_address_lowercased(self):
        data = encode_erc20_transfer_calldata(RECIPIENT, 1)
        assert RECIPIENT[2:].lower() in data

    def test_max_uint256(self):
        data = encode_erc20_transfer_calldata(RECIPIENT, 2 ** 256 - 1)
        assert data.endswith("f" * 64)

    def test_amount_overflow_rejected(self):
        with pytest.raises(InvalidAmount):
            encode_erc20_transfer_calldata(RECIPIENT, 2 ** 256)

    @pytest.mark.parametrize("address", [
        "",
        "742d35Cc6634C0532925a3b844Bc454e4438f44e",   # no prefix
        "0x742d35",                                    # too short
        "0xZZ2d35Cc6634C0532925a3b844Bc454e4438f44e",  # not hex
    ])
    def test_invalid_recipient_rejected(self, address):
        with pytest.raises(InvalidAddress):
            encode_erc20_transfer_calldata(address, 1)


class TestDescriptors:
    """Tests for native / ERC-20 transaction descriptors"""

    def test_native_transfer(self):
        tx = encode_native_transfer(SENDER, RECIPIENT, 10 ** 18, gas_price=30_000_000_000)

        assert tx.from_address == SENDER
        assert tx.to == RECIPIENT
        assert tx.value == 10 ** 18
        assert tx.gas_limit == 21_000
        assert tx.max_fee_per_gas == 60_000_000_000
        assert tx.max_priority_fee_per_gas == 60_000_000_000
        assert tx.data is None

    def test_erc20_transfer(self):
        tx = encode_erc20_transfer(SENDER, USDC, RECIPIENT, 2_500_000, gas_price=31)

        assert tx.to == USDC
        assert tx.value == 0
        assert tx.gas_limit == 100_000
        assert tx.max_fee_per_gas == 62
        assert tx.max_priority_fee_per_gas == 15  # integer division
        assert tx.data == encode_erc20_transfer_calldata(RECIPIENT, 2_500_000)

    def test_erc20_without_contract_rejected(self):
        with pytest.raises(TransactionFailed) as exc_info:
            encode_erc20_transfer(SENDER, None, RECIPIENT, 1, gas_price=1)
        assert exc_info.value.reason == "Cannot send native token as ERC-20"

    def test_to_dict(self):
        tx = encode_erc20_transfer(SENDER, USDC, RECIPIENT, 1, gas_price=10)
        tx_dict = tx.to_dict()

        assert tx_dict["from"] == SENDER
        assert tx_dict["to"] == USDC
        assert tx_dict["gas"] == 100_000
        assert tx_dict["maxFeePerGas"] == 20
        assert tx_dict["maxPriorityFeePerGas"] == 5
        assert tx_dict["data"].startswith("0xa9059cbb")

    def test_to_dict_native_has_no_data(self):
        tx = encode_native_transfer(SENDER, RECIPIENT, 1, gas_price=10)
        assert "data" not in tx.to_dict()


class TestEvmWireEncoder:
    """Tests for EvmWireEncoder with mocked collaborators"""

    @pytest.fixture
    def gas(self):
        source = Mock()
        source.gas_price.return_value = 20_000_000_000
        return source

    @pytest.fixture
    def sender(self):
        sender = Mock()
        sender.send_transaction.return_value = "0xabc123"
        return sender

    @pytest.fixture
    def encoder(self, gas, sender):
        return EvmWireEncoder(gas, sender)

    @pytest.fixture
    def wallet(self):
        return Wallet(address=SENDER, chain="EVM")

    def request(self, wallet, token, amount="1.5", recipient=RECIPIENT, chain_id=1):
        return TransferRequest(
            wallet=wallet,
            token=token,
            recipient=recipient,
            amount=amount,
            selector=EvmNetwork(chain_id),
        )

    def test_native_build(self, encoder, gas, wallet):
        tx = encoder.build(self.request(wallet, Token.native(8453)))

        assert isinstance(tx, EVMTransaction)
        assert tx.value == 1_500_000_000_000_000_000
        assert tx.gas_limit == 21_000
        assert tx.max_fee_per_gas == 40_000_000_000
        assert tx.max_priority_fee_per_gas == 40_000_000_000
        gas.gas_price.assert_called_once_with(1)

    def test_erc20_build(self, encoder, wallet):
        tx = encoder.build(self.request(wallet, make_usdc(), amount="2.5"))

        assert tx.to == USDC
        assert tx.value == 0
        assert tx.data == encode_erc20_transfer_calldata(RECIPIENT, 2_500_000)
        assert tx.max_priority_fee_per_gas == 10_000_000_000

    def test_erc20_on_native_token_makes_no_network_call(self, encoder, gas, sender, wallet):
        with pytest.raises(TransactionFailed) as exc_info:
            encoder.build_erc20_transfer(self.request(wallet, Token.native(1)))

        assert exc_info.value.reason == "Cannot send native token as ERC-20"
        gas.gas_price.assert_not_called()
        sender.send_transaction.assert_not_called()

    def test_invalid_recipient_before_network(self, encoder, gas, wallet):
        with pytest.raises(InvalidAddress):
            encoder.build(self.request(wallet, Token.native(1), recipient="not-an-address"))
        gas.gas_price.assert_not_called()

    def test_invalid_amount_before_network(self, encoder, gas, wallet):
        with pytest.raises(InvalidAmount):
            encoder.build(self.request(wallet, make_usdc(), amount="1.2.3"))
        gas.gas_price.assert_not_called()

    def test_zero_amount_rejected(self, encoder, gas, wallet):
        with pytest.raises(InvalidAmount):
            encoder.build(self.request(wallet, Token.native(1), amount="0.0"))
        gas.gas_price.assert_not_called()

    def test_amount_above_uint256_rejected(self, encoder, wallet):
        with pytest.raises(InvalidAmount):
            encoder.build(self.request(wallet, Token.native(1), amount=str(2 ** 256)))

    def test_solana_token_rejected(self, encoder, wallet):
        with pytest.raises(TransactionFailed):
            encoder.build(self.request(wallet, SolanaToken.native_sol()))

    def test_solana_selector_rejected(self, encoder, wallet):
        request = TransferRequest(
            wallet=wallet,
            token=Token.native(1),
            recipient=RECIPIENT,
            amount="1",
            selector=SolanaNetwork(),
        )
        with pytest.raises(TransactionFailed):
            encoder.build(request)

    def test_submit_passes_result_through(self, encoder, sender, wallet):
        request = self.request(wallet, Token.native(137), chain_id=137)
        tx = encoder.build(request)

        assert encoder.submit(request, tx) == "0xabc123"
        sender.send_transaction.assert_called_once_with(wallet, tx, 137)

    def test_can_submit(self, gas, sender):
        assert EvmWireEncoder(gas, sender).can_submit
        assert not EvmWireEncoder(gas).can_submit
