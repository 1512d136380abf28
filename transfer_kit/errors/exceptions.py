"""
Exception definitions for Transfer Kit
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for transfer and balance operations

    1xxx - RPC / transport errors
    2xxx - Transaction errors
    3xxx - Input validation errors (amounts, addresses)
    4xxx - Session errors
    6xxx - Signer errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Transaction errors
    TX_FAILED = "2001"
    TX_SEND_FAILED = "2002"

    # Amount errors
    AMOUNT_EMPTY = "3001"
    AMOUNT_INVALID_FORMAT = "3002"
    AMOUNT_OUT_OF_RANGE = "3003"

    # Address errors
    ADDRESS_INVALID = "3101"
    ADDRESS_INVALID_CHARACTER = "3102"

    # Session errors
    NOT_AUTHENTICATED = "4001"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"
    SIGNER_WALLET_MISMATCH = "6003"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class TransferKitError(Exception):
    """
    Base exception for all transfer kit errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class RpcError(TransferKitError):
    """
    RPC-related errors - typically recoverable

    Raised when:
    - Connection to RPC endpoint fails
    - Request times out
    - Rate limit is hit
    - Node answers with a JSON-RPC error object
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            "RPC rate limit exceeded",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )


class MalformedResponse(TransferKitError):
    """
    A node or API answered, but a required field is absent or mistyped.

    Raised at the deserialization boundary so callers never see silently
    defaulted values.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.RPC_INVALID_RESPONSE,
            recoverable=False,
            details={"source": source, "field": field_name},
        )
        self.source = source
        self.field_name = field_name

    @classmethod
    def missing_field(cls, source: str, field_name: str) -> "MalformedResponse":
        return cls(
            f"Malformed {source} response: missing or invalid '{field_name}'",
            source=source,
            field_name=field_name,
        )


class InvalidAmount(TransferKitError):
    """
    Malformed, empty or unrepresentable decimal amount

    Raised before any network call is attempted.
    """

    def __init__(
        self,
        message: str,
        amount: Optional[str] = None,
        code: ErrorCode = ErrorCode.AMOUNT_INVALID_FORMAT,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"amount": amount},
        )
        self.amount = amount

    @classmethod
    def empty(cls) -> "InvalidAmount":
        return cls("Amount is empty", amount="", code=ErrorCode.AMOUNT_EMPTY)

    @classmethod
    def bad_format(cls, amount: str) -> "InvalidAmount":
        return cls(f"Invalid amount: {amount!r}", amount=amount)

    @classmethod
    def out_of_range(cls, amount: str, reason: str) -> "InvalidAmount":
        return cls(
            f"Amount {amount!r} out of range: {reason}",
            amount=amount,
            code=ErrorCode.AMOUNT_OUT_OF_RANGE,
        )


class InvalidAddress(TransferKitError):
    """
    Address cannot be decoded for the target chain
    """

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        code: ErrorCode = ErrorCode.ADDRESS_INVALID,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"address": address},
        )
        self.address = address

    @classmethod
    def for_chain(cls, address: str, chain: str) -> "InvalidAddress":
        return cls(f"Invalid {chain} address: {address!r}", address=address)


class InvalidCharacter(InvalidAddress):
    """
    Base58 input contains a character outside the alphabet
    """

    def __init__(self, address: str, character: str, position: int):
        super().__init__(
            f"Invalid base58 character {character!r} at position {position}",
            address=address,
            code=ErrorCode.ADDRESS_INVALID_CHARACTER,
        )
        self.character = character
        self.position = position
        self.details.update({"character": character, "position": position})


class NotAuthenticated(TransferKitError):
    """
    No bearer token is available on the session
    """

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, ErrorCode.NOT_AUTHENTICATED, recoverable=False)


class TransactionFailed(TransferKitError):
    """
    Catch-all transaction error

    Raised when:
    - The balances API answers with a non-200 status
    - A transfer violates a business rule (e.g. native token via ERC-20)
    - Fetching network context or submitting the payload fails
    - The signing collaborator rejects the payload

    Attributes:
        reason: The bare failure reason, without code prefix
    """

    def __init__(
        self,
        reason: str,
        code: ErrorCode = ErrorCode.TX_FAILED,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            reason,
            code,
            recoverable=False,
            original_error=original_error,
            details={"status_code": status_code} if status_code is not None else None,
        )
        self.reason = reason
        self.status_code = status_code

    @classmethod
    def api_error(cls, status_code: int, body: str) -> "TransactionFailed":
        return cls(f"API error ({status_code}): {body}", status_code=status_code)

    @classmethod
    def send_failed(cls, error: Exception) -> "TransactionFailed":
        return cls(
            f"Failed to send transaction: {error}",
            ErrorCode.TX_SEND_FAILED,
            original_error=error,
        )


class SignerError(TransferKitError):
    """
    Signing-related errors

    Raised when:
    - No signer configured for the chain family
    - Signing operation fails
    - Signer key does not belong to the requested wallet
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
        recoverable: bool = False,
    ):
        super().__init__(message, code, recoverable=recoverable)

    @classmethod
    def not_configured(cls, family: str = "") -> "SignerError":
        target = f" for {family}" if family else ""
        return cls(
            f"No signer configured{target}. Provide a signing collaborator.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED)

    @classmethod
    def wallet_mismatch(cls, wallet_address: str, signer_address: str) -> "SignerError":
        return cls(
            f"Signer {signer_address} cannot sign for wallet {wallet_address}",
            ErrorCode.SIGNER_WALLET_MISMATCH,
        )


class ConfigurationError(TransferKitError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
