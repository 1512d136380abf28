"""
EVM transaction descriptors and ERC-20 call data

Fee heuristic (not a fee-market estimate):
- native transfer: max fee = priority fee = 2 x gas price
- ERC-20 transfer: max fee = 2 x gas price, priority fee = gas price // 2
"""

from typing import Optional

from web3 import Web3

from ...errors import InvalidAddress, InvalidAmount, TransactionFailed
from ...types.evm_tokens import (
    ERC20_TRANSFER_GAS_LIMIT,
    ERC20_TRANSFER_SELECTOR,
    NATIVE_TRANSFER_GAS_LIMIT,
    UINT256_MAX,
)
from ...types.payload import EVMTransaction

NATIVE_AS_ERC20_REASON = "Cannot send native token as ERC-20"


def validate_address(address: Optional[str], role: str = "address") -> str:
    """
    Check a 20-byte hex address (checksum is not enforced)

    Returns:
        The address unchanged

    Raises:
        InvalidAddress: Not a 0x-prefixed 40 hex digit address
    """
    if not address or not address.startswith("0x") or not Web3.is_address(address.lower()):
        raise InvalidAddress.for_chain(address or "", f"EVM {role}")
    return address


def _pad_word(hex_value: str) -> str:
    return hex_value.rjust(64, "0")


def encode_erc20_transfer_calldata(to: str, amount: int) -> str:
    """
    ABI call data for transfer(address,uint256)

    Args:
        to: Recipient (0x-prefixed hex)
        amount: Amount in base units

    Returns:
        "0x" + selector + 32-byte address word + 32-byte amount word
    """
    validate_address(to, "recipient")
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmount.out_of_range(str(amount), "not a uint256")

    address_word = _pad_word(to[2:].lower())
    amount_word = _pad_word(format(amount, "x"))
    return f"0x{ERC20_TRANSFER_SELECTOR}{address_word}{amount_word}"


def encode_native_transfer(
    from_address: str,
    to: str,
    value: int,
    gas_price: int,
) -> EVMTransaction:
    """
    Descriptor for a native-asset transfer

    Args:
        from_address: Sender
        to: Recipient
        value: Amount in wei
        gas_price: Current gas price in wei
    """
    validate_address(to, "recipient")
    if value < 0 or value > UINT256_MAX:
        raise InvalidAmount.out_of_range(str(value), "not a uint256")

    return EVMTransaction(
        from_address=from_address,
        to=to,
        value=value,
        gas_limit=NATIVE_TRANSFER_GAS_LIMIT,
        max_fee_per_gas=gas_price * 2,
        max_priority_fee_per_gas=gas_price * 2,
    )


def encode_erc20_transfer(
    from_address: str,
    contract_address: Optional[str],
    to: str,
    amount: int,
    gas_price: int,
) -> EVMTransaction:
    """
    Descriptor for an ERC-20 transfer call

    The transaction goes to the token contract with zero value; the
    recipient and amount live in the call data.

    Raises:
        TransactionFailed: contract_address is None (native token)
    """
    if contract_address is None:
        raise TransactionFailed(NATIVE_AS_ERC20_REASON)
    validate_address(contract_address, "token contract")

    return EVMTransaction(
        from_address=from_address,
        to=contract_address,
        value=0,
        gas_limit=ERC20_TRANSFER_GAS_LIMIT,
        max_fee_per_gas=gas_price * 2,
        max_priority_fee_per_gas=gas_price // 2,
        data=encode_erc20_transfer_calldata(to, amount),
    )
