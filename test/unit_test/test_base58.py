"""
Base58 Codec Unit Tests

solders is used as an independent reference for public keys.
"""

import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from transfer_kit.codec import base58
from transfer_kit.errors import InvalidAddress, InvalidCharacter, ErrorCode
from transfer_kit.types.solana_tokens import SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID


USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


class TestDecode:
    """Tests for base58.decode"""

    def test_known_key_matches_solders(self):
        assert base58.decode(TOKEN_PROGRAM_ID) == bytes(Pubkey.from_string(TOKEN_PROGRAM_ID))
        assert base58.decode(USDC_MINT) == bytes(Pubkey.from_string(USDC_MINT))

    def test_system_program_is_all_zero(self):
        """Each leading '1' is a zero byte"""
        assert base58.decode(SYSTEM_PROGRAM_ID) == bytes(32)

    def test_random_keys_match_solders(self):
        for _ in range(20):
            pubkey = Keypair().pubkey()
            assert base58.decode(str(pubkey)) == bytes(pubkey)

    def test_short_value_left_padded(self):
        # "2" is the digit 1
        assert base58.decode("2") == bytes(31) + b"\x01"

    def test_long_value_keeps_trailing_bytes(self):
        data = bytes(range(1, 41))
        assert base58.decode(base58.encode(data)) == data[-32:]

    def test_custom_length(self):
        data = bytes(range(64))
        assert base58.decode(base58.encode(data), length=64) == data

    def test_empty_string_is_zero_key(self):
        assert base58.decode("") == bytes(32)

    @pytest.mark.parametrize("char", ["0", "I", "O", "l"])
    def test_excluded_characters_rejected(self, char):
        value = USDC_MINT[:10] + char + USDC_MINT[11:]
        with pytest.raises(InvalidCharacter) as exc_info:
            base58.decode(value)

        error = exc_info.value
        assert error.character == char
        assert error.position == 10
        assert error.code == ErrorCode.ADDRESS_INVALID_CHARACTER

    def test_invalid_character_is_invalid_address(self):
        with pytest.raises(InvalidAddress):
            base58.decode("0x1234")


class TestDecodeRaw:
    """Tests for base58.decode_raw"""

    def test_keeps_natural_length(self):
        assert base58.decode_raw("2") == b"\x01"
        assert base58.decode_raw("112") == b"\x00\x00\x01"
        assert base58.decode_raw("") == b""

    def test_long_value_not_truncated(self):
        data = bytes(range(1, 41))
        assert base58.decode_raw(base58.encode(data)) == data

    def test_pubkey_matches_solders(self):
        pubkey = Keypair().pubkey()
        assert base58.decode_raw(str(pubkey)) == bytes(pubkey)

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacter):
            base58.decode_raw("abc0")


class TestEncode:
    """Tests for base58.encode"""

    def test_round_trip_known_key(self):
        raw = bytes(Pubkey.from_string(USDC_MINT))
        assert base58.encode(raw) == USDC_MINT
        assert base58.decode(base58.encode(raw)) == raw

    def test_leading_zero_bytes(self):
        assert base58.encode(bytes(32)) == SYSTEM_PROGRAM_ID

    def test_empty(self):
        assert base58.encode(b"") == ""


class TestIsValidPubkey:
    """Tests for base58.is_valid_pubkey"""

    def test_valid_keys(self):
        assert base58.is_valid_pubkey(USDC_MINT)
        assert base58.is_valid_pubkey(SYSTEM_PROGRAM_ID)
        assert base58.is_valid_pubkey(str(Keypair().pubkey()))

    def test_wrong_length(self):
        assert not base58.is_valid_pubkey("2")
        assert not base58.is_valid_pubkey(SYSTEM_PROGRAM_ID + "1")
        assert not base58.is_valid_pubkey(base58.encode(bytes(range(1, 41))))

    def test_invalid_characters(self):
        assert not base58.is_valid_pubkey("0" * 32)
