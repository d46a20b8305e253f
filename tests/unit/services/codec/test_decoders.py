# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Unit tests for the per-encoding decoders: byte rules, validation failures,
and the base64 URL-safe retry.

Pure logic: no filesystem or network access.
"""

import base64
import binascii
from unittest.mock import patch

from src.services.codec.decoders import (
    Decoded,
    Rejected,
    decode,
    decode_ascii,
    decode_base64,
    decode_binary,
    decode_hex,
    decode_ucs2,
    decode_utf8,
    decode_utf16le,
)
from src.services.codec.models import EncodingKind, FailureReason


# ---------------------------------------------------------------------------
# Character-based encodings
# ---------------------------------------------------------------------------
class TestBinary:
    def test_latin1_range_maps_one_to_one(self) -> None:
        payload = bytes(range(256)).decode("latin-1")
        assert decode_binary(payload) == Decoded(bytes(range(256)))

    def test_code_points_above_255_keep_low_byte(self) -> None:
        # Lossy: U+0141 -> 0x41, U+6D4B -> 0x4B
        assert decode_binary("Ł测") == Decoded(b"\x41\x4b")


class TestAscii:
    def test_plain_ascii_is_unchanged(self) -> None:
        assert decode_ascii("Hello") == Decoded(b"Hello")

    def test_high_characters_are_masked_not_rejected(self) -> None:
        # 0xE9 & 0x7F == 0x69 ('i')
        assert decode_ascii("café") == Decoded(b"cafi")


class TestUtf8:
    def test_multibyte_text(self) -> None:
        text = "ñáé 测试 テスト"
        assert decode_utf8(text) == Decoded(text.encode("utf-8"))

    def test_lone_surrogate_becomes_replacement_character(self) -> None:
        assert decode_utf8("a\ud800b") == Decoded(b"a\xef\xbf\xbdb")


class TestUtf16:
    def test_little_endian_two_bytes_per_unit(self) -> None:
        assert decode_utf16le("Hi") == Decoded(b"H\x00i\x00")

    def test_astral_character_uses_surrogate_pair(self) -> None:
        assert decode_utf16le("\U0001f600") == Decoded("\U0001f600".encode("utf-16-le"))

    def test_ucs2_matches_utf16le(self) -> None:
        text = "Grüße 测试"
        assert decode_ucs2(text) == decode_utf16le(text)

    def test_lone_surrogate_is_passed_through(self) -> None:
        assert decode_ucs2("\ud800") == Decoded(b"\x00\xd8")


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------
class TestHex:
    def test_hello(self) -> None:
        assert decode_hex("48656c6c6f") == Decoded(b"Hello")

    def test_mixed_case_digits(self) -> None:
        assert decode_hex("DeadBEEF") == Decoded(b"\xde\xad\xbe\xef")

    def test_non_hex_characters_rejected(self) -> None:
        result = decode_hex("zz")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_HEX

    def test_whitespace_rejected(self) -> None:
        result = decode_hex("48 65")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_HEX

    def test_odd_length_rejected(self) -> None:
        result = decode_hex("abc")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_HEX
        assert "odd length" in result.message

    def test_trailing_newline_rejected(self) -> None:
        # "414\n" has even length; the newline must not slip past the digit check
        result = decode_hex("414\n")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_HEX

    def test_leading_newline_rejected(self) -> None:
        result = decode_hex("\n41")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_HEX


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------
class TestBase64:
    def test_hello(self) -> None:
        assert decode_base64("SGVsbG8=") == Decoded(b"Hello")

    def test_whitespace_is_stripped(self) -> None:
        assert decode_base64("SGVs\r\nbG8=  ") == Decoded(b"Hello")

    def test_missing_padding_is_a_length_error(self) -> None:
        result = decode_base64("SGVsbG8")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_BASE64_LENGTH

    def test_foreign_characters_are_a_format_error(self) -> None:
        result = decode_base64("SGVs*G8=")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_BASE64_FORMAT

    def test_url_safe_alphabet_fails_format_check(self) -> None:
        result = decode_base64("-_-_")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_BASE64_FORMAT

    def test_padding_in_the_middle_is_a_format_error(self) -> None:
        result = decode_base64("SG=sbG8=")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.INVALID_BASE64_FORMAT

    def test_retry_with_url_safe_substitution_after_decode_error(self) -> None:
        with patch.object(base64, "b64decode", side_effect=[binascii.Error("Incorrect padding"), b"ok"]) as mocked:
            result = decode_base64("SGVsbG8=")
        assert result == Decoded(b"ok")
        assert mocked.call_count == 2

    def test_both_attempts_failing_reports_first_error(self) -> None:
        errors = [binascii.Error("Incorrect padding"), binascii.Error("second")]
        with patch.object(base64, "b64decode", side_effect=errors):
            result = decode_base64("SGVsbG8=")
        assert isinstance(result, Rejected)
        assert result.reason is FailureReason.BASE64_DECODE_FAILURE
        assert result.message == "Incorrect padding"


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------
class TestRoundTrip:
    SAMPLE = "Hello World! ñáéíóú 测试 テスト".encode("utf-8")

    def test_hex(self) -> None:
        assert decode(self.SAMPLE.hex(), EncodingKind.HEX) == Decoded(self.SAMPLE)

    def test_base64(self) -> None:
        encoded = base64.b64encode(self.SAMPLE).decode("ascii")
        assert decode(encoded, EncodingKind.BASE64) == Decoded(self.SAMPLE)

    def test_utf8(self) -> None:
        assert decode(self.SAMPLE.decode("utf-8"), EncodingKind.UTF8) == Decoded(self.SAMPLE)

    def test_utf16le(self) -> None:
        raw = "Grüße 测试".encode("utf-16-le")
        assert decode(raw.decode("utf-16-le"), EncodingKind.UTF16LE) == Decoded(raw)

    def test_binary_within_byte_range(self) -> None:
        assert decode(self.SAMPLE.decode("latin-1"), EncodingKind.BINARY) == Decoded(self.SAMPLE)

    def test_ascii_within_seven_bits(self) -> None:
        raw = bytes(range(128))
        assert decode(raw.decode("ascii"), EncodingKind.ASCII) == Decoded(raw)
