"""
Test Errors Module

Tests for transfer_kit.errors package.
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    """Test ErrorCode enum"""
    from transfer_kit.errors import ErrorCode

    print("Testing ErrorCode...")

    assert ErrorCode.RPC_CONNECTION_FAILED.value == "1001"
    assert ErrorCode.TX_FAILED.value == "2001"
    assert ErrorCode.AMOUNT_EMPTY.value == "3001"
    assert ErrorCode.NOT_AUTHENTICATED.value == "4001"
    assert ErrorCode.SIGNER_NOT_CONFIGURED.value == "6001"

    print("  ErrorCode: PASSED")


def test_transfer_kit_error():
    """Test TransferKitError base class"""
    from transfer_kit.errors import TransferKitError, ErrorCode

    print("Testing TransferKitError...")

    error = TransferKitError(
        message="Test error",
        code=ErrorCode.RPC_CONNECTION_FAILED,
        recoverable=True,
    )

    # __str__ returns "[code] message" format
    assert "[1001] Test error" == str(error)
    assert error.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error.should_retry
    assert error.details == {}

    print("  TransferKitError: PASSED")


def test_rpc_error():
    """Test RpcError exception"""
    from transfer_kit.errors import RpcError, ErrorCode

    print("Testing RpcError...")

    cause = OSError("refused")
    error1 = RpcError.connection_failed("https://rpc.example.com", cause)
    assert error1.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error1.recoverable
    assert error1.endpoint == "https://rpc.example.com"
    assert error1.original_error is cause

    error2 = RpcError.timeout("https://rpc.example.com", 30.0)
    assert error2.code == ErrorCode.RPC_TIMEOUT
    assert "30.0s" in error2.message

    error3 = RpcError.rate_limited("https://rpc.example.com")
    assert error3.code == ErrorCode.RPC_RATE_LIMITED

    print("  RpcError: PASSED")


def test_invalid_amount():
    """Test InvalidAmount exception"""
    from transfer_kit.errors import InvalidAmount, ErrorCode, TransferKitError

    print("Testing InvalidAmount...")

    empty = InvalidAmount.empty()
    assert empty.code == ErrorCode.AMOUNT_EMPTY
    assert not empty.recoverable

    bad = InvalidAmount.bad_format("1.2.3")
    assert bad.code == ErrorCode.AMOUNT_INVALID_FORMAT
    assert bad.amount == "1.2.3"
    assert bad.details["amount"] == "1.2.3"

    out = InvalidAmount.out_of_range("99", "too large")
    assert out.code == ErrorCode.AMOUNT_OUT_OF_RANGE
    assert isinstance(out, TransferKitError)

    print("  InvalidAmount: PASSED")


def test_invalid_address():
    """Test InvalidAddress and InvalidCharacter"""
    from transfer_kit.errors import InvalidAddress, InvalidCharacter, ErrorCode

    print("Testing InvalidAddress...")

    error = InvalidAddress.for_chain("0x123", "EVM recipient")
    assert error.code == ErrorCode.ADDRESS_INVALID
    assert error.address == "0x123"
    assert "EVM recipient" in error.message

    char_error = InvalidCharacter("abc0", "0", 3)
    assert isinstance(char_error, InvalidAddress)
    assert char_error.code == ErrorCode.ADDRESS_INVALID_CHARACTER
    assert char_error.character == "0"
    assert char_error.position == 3
    assert char_error.details["position"] == 3
    assert char_error.details["address"] == "abc0"

    print("  InvalidAddress: PASSED")


def test_transaction_failed():
    """Test TransactionFailed exception"""
    from transfer_kit.errors import TransactionFailed, ErrorCode

    print("Testing TransactionFailed...")

    api = TransactionFailed.api_error(500, "Internal Server Error")
    assert api.reason == "API error (500): Internal Server Error"
    assert api.status_code == 500
    assert api.code == ErrorCode.TX_FAILED
    assert str(api) == "[2001] API error (500): Internal Server Error"

    cause = RuntimeError("rejected by user")
    sent = TransactionFailed.send_failed(cause)
    assert sent.code == ErrorCode.TX_SEND_FAILED
    assert sent.original_error is cause
    assert "rejected by user" in sent.reason

    print("  TransactionFailed: PASSED")


def test_not_authenticated():
    """Test NotAuthenticated exception"""
    from transfer_kit.errors import NotAuthenticated, ErrorCode

    print("Testing NotAuthenticated...")

    error = NotAuthenticated()
    assert error.code == ErrorCode.NOT_AUTHENTICATED
    assert error.message == "Not authenticated"
    assert not error.recoverable

    print("  NotAuthenticated: PASSED")


def test_malformed_response():
    """Test MalformedResponse exception"""
    from transfer_kit.errors import MalformedResponse, ErrorCode

    print("Testing MalformedResponse...")

    error = MalformedResponse.missing_field("getBalance", "value")
    assert error.code == ErrorCode.RPC_INVALID_RESPONSE
    assert error.source == "getBalance"
    assert error.field_name == "value"

    print("  MalformedResponse: PASSED")


def test_signer_error():
    """Test SignerError exception"""
    from transfer_kit.errors import SignerError, ErrorCode

    print("Testing SignerError...")

    error1 = SignerError.not_configured("SOL")
    assert error1.code == ErrorCode.SIGNER_NOT_CONFIGURED
    assert "for SOL" in error1.message

    error2 = SignerError.failed("device locked")
    assert error2.code == ErrorCode.SIGNER_FAILED

    error3 = SignerError.wallet_mismatch("WalletA", "SignerB")
    assert error3.code == ErrorCode.SIGNER_WALLET_MISMATCH

    print("  SignerError: PASSED")


def test_configuration_error():
    """Test ConfigurationError exception"""
    from transfer_kit.errors import ConfigurationError, ErrorCode

    print("Testing ConfigurationError...")

    error1 = ConfigurationError.missing("BALANCES_API_ENVIRONMENT_ID")
    assert error1.code == ErrorCode.CONFIG_MISSING

    error2 = ConfigurationError.invalid("cluster", "unknown")
    assert error2.code == ErrorCode.CONFIG_INVALID
    assert "'cluster'" in error2.message

    print("  ConfigurationError: PASSED")


def main():
    """Run all error tests"""
    print("=" * 60)
    print("Errors Module Tests")
    print("=" * 60)

    test_error_code()
    test_transfer_kit_error()
    test_rpc_error()
    test_invalid_amount()
    test_invalid_address()
    test_transaction_failed()
    test_not_authenticated()
    test_malformed_response()
    test_signer_error()
    test_configuration_error()

    print("=" * 60)
    print("All error tests PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
