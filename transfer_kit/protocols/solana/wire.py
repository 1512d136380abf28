"""
Solana legacy transaction wire format

Layout of every transaction built here:

    [1]                     signature count
    [64 x 0x00]             placeholder signature (filled in by the signer)
    [1, 0, 1]               header: required sigs, readonly signed, readonly unsigned
    [n] + n x 32 bytes      distinct account keys, fee payer first, program last
    32 bytes                recent blockhash
    [1]                     instruction count
    [program index]
    [k] + k x u8            account indices
    [len] + data            instruction data

Every count is a compact-u16 that fits in one byte for these shapes.
"""

import struct
from typing import List

from solders.pubkey import Pubkey

from ...codec import base58
from ...errors import InvalidAddress, InvalidAmount
from ...types.solana_tokens import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)

U64_MAX = 2 ** 64 - 1
SIGNATURE_LENGTH = 64

# Instruction discriminators
SYSTEM_TRANSFER = 2       # u32 LE
SPL_TOKEN_TRANSFER = 3    # u8

MESSAGE_HEADER = bytes([1, 0, 1])


def decode_pubkey(address: str) -> bytes:
    """
    Decode a base58 public key that must be exactly 32 bytes

    Raises:
        InvalidCharacter: Character outside the base58 alphabet
        InvalidAddress: Decodes to anything but 32 bytes
    """
    key = base58.decode_raw(address)
    if len(key) != base58.PUBKEY_LENGTH:
        raise InvalidAddress.for_chain(address, "Solana")
    return key


def get_associated_token_address(
    owner: bytes,
    mint: bytes,
    token_program: bytes = base58.decode(TOKEN_PROGRAM_ID),
) -> bytes:
    """
    Associated token account of owner for mint

    Program-derived address of seeds [owner, token_program, mint] under
    the Associated Token Account program.

    Args:
        owner: Owner public key (32 bytes)
        mint: Mint public key (32 bytes)
        token_program: Token program id (32 bytes)

    Returns:
        ATA public key (32 bytes)
    """
    ata_program = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
    seeds = [bytes(owner), bytes(token_program), bytes(mint)]
    address, _ = Pubkey.find_program_address(seeds, ata_program)
    return bytes(address)


def _check_u64(amount: int):
    if amount < 0 or amount > U64_MAX:
        raise InvalidAmount.out_of_range(str(amount), "not a u64")


def system_transfer_data(lamports: int) -> bytes:
    """System program Transfer: u32 LE 2 + u64 LE lamports (12 bytes)"""
    _check_u64(lamports)
    return struct.pack("<IQ", SYSTEM_TRANSFER, lamports)


def spl_transfer_data(amount: int) -> bytes:
    """SPL Token Transfer: u8 3 + u64 LE amount (9 bytes)"""
    _check_u64(amount)
    return struct.pack("<BQ", SPL_TOKEN_TRANSFER, amount)


def _compile(
    accounts: List[bytes],
    blockhash: bytes,
    program_index: int,
    account_indices: List[int],
    data: bytes,
) -> bytes:
    for key in accounts:
        if len(key) != 32:
            raise InvalidAddress(f"Account key must be 32 bytes, got {len(key)}")
    if len(blockhash) != 32:
        raise InvalidAddress(f"Blockhash must be 32 bytes, got {len(blockhash)}")

    # A key may appear only once in the table (self-transfers repeat one)
    unique: List[bytes] = []
    position = []
    for key in accounts:
        if key not in unique:
            unique.append(key)
        position.append(unique.index(key))
    accounts = unique
    program_index = position[program_index]
    account_indices = [position[index] for index in account_indices]

    out = bytearray()
    out.append(1)
    out += bytes(SIGNATURE_LENGTH)

    out += MESSAGE_HEADER
    out.append(len(accounts))
    for key in accounts:
        out += key
    out += blockhash

    out.append(1)
    out.append(program_index)
    out.append(len(account_indices))
    out += bytes(account_indices)
    out.append(len(data))
    out += data
    return bytes(out)


def build_native_transfer(
    from_key: bytes,
    to_key: bytes,
    lamports: int,
    blockhash: bytes,
) -> bytes:
    """
    Unsigned native SOL transfer

    Accounts: [from, to, SystemProgram]; instruction accounts [0, 1].
    A self-transfer collapses to [from, SystemProgram] with accounts [0, 0].
    """
    return _compile(
        accounts=[from_key, to_key, base58.decode(SYSTEM_PROGRAM_ID)],
        blockhash=blockhash,
        program_index=2,
        account_indices=[0, 1],
        data=system_transfer_data(lamports),
    )


def build_spl_transfer(
    owner: bytes,
    source_ata: bytes,
    dest_ata: bytes,
    amount: int,
    blockhash: bytes,
) -> bytes:
    """
    Unsigned SPL token transfer

    Accounts: [owner, source_ata, dest_ata, TokenProgram]; instruction
    accounts [source, destination, authority] = [1, 2, 0]. When both ATAs
    are the same account the table drops the repeat and accounts become
    [1, 1, 0].
    """
    return _compile(
        accounts=[owner, source_ata, dest_ata, base58.decode(TOKEN_PROGRAM_ID)],
        blockhash=blockhash,
        program_index=3,
        account_indices=[1, 2, 0],
        data=spl_transfer_data(amount),
    )
