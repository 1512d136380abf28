"""
Base58 codec (Bitcoin / Solana alphabet)

decode() always returns a fixed 32-byte public-key representation, which is
what every address in a Solana wire transaction is.
"""

from ..errors import InvalidCharacter

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
PUBKEY_LENGTH = 32

_INDEX = {char: index for index, char in enumerate(ALPHABET)}


def decode_raw(value: str) -> bytes:
    """Variable-length decode: one zero byte per leading '1', then the big-endian value"""
    number = 0
    for position, char in enumerate(value):
        digit = _INDEX.get(char)
        if digit is None:
            raise InvalidCharacter(value, char, position)
        number = number * 58 + digit

    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    leading_zeros = len(value) - len(value.lstrip("1"))
    return b"\x00" * leading_zeros + body


def decode(value: str, length: int = PUBKEY_LENGTH) -> bytes:
    """
    Decode a base58 string into exactly `length` bytes

    Leading '1' characters become leading zero bytes. The result is
    left-padded with zero bytes when short and keeps only the trailing
    `length` bytes when long.

    Args:
        value: Base58 string (address, blockhash)
        length: Output width in bytes (default: 32)

    Returns:
        Fixed-width bytes

    Raises:
        InvalidCharacter: If a character is outside the base58 alphabet
            ('0', 'I', 'O' and 'l' are excluded)
    """
    raw = decode_raw(value)

    if len(raw) < length:
        return raw.rjust(length, b"\x00")
    return raw[-length:]


def encode(data: bytes) -> str:
    """
    Encode bytes as base58

    Inverse of decode() for 32-byte keys; works for any length.
    """
    number = int.from_bytes(data, "big")
    chars = []
    while number:
        number, remainder = divmod(number, 58)
        chars.append(ALPHABET[remainder])

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading_zeros + "".join(reversed(chars))


def is_valid_pubkey(value: str) -> bool:
    """Check that a string is exactly 32 bytes of base58 (no padding or truncation needed)"""
    try:
        return len(decode_raw(value)) == PUBKEY_LENGTH
    except InvalidCharacter:
        return False
