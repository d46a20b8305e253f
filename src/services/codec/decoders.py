# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Text-to-bytes decoders, one per EncodingKind.

Every decoder is a total function: it returns Decoded or Rejected and never
raises, so the engine can dispatch on the enum without a try/except around
each variant.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import EncodingKind, FailureReason


@dataclass(frozen=True)
class Decoded:
    data: bytes


@dataclass(frozen=True)
class Rejected:
    reason: FailureReason
    message: str


DecodeResult = Decoded | Rejected

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")
_WHITESPACE_RE = re.compile(r"\s+")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def decode_binary(payload: str) -> DecodeResult:
    """Low byte of every character. Lossy above U+00FF: U+0141 becomes 0x41."""
    return Decoded(bytes(ord(ch) & 0xFF for ch in payload))


def decode_ascii(payload: str) -> DecodeResult:
    """Low 7 bits of every character; out-of-range values are masked, not rejected."""
    return Decoded(bytes(ord(ch) & 0x7F for ch in payload))


def decode_utf8(payload: str) -> DecodeResult:
    # A str can only hold a surrogate code point unpaired.
    return Decoded(_SURROGATE_RE.sub("\ufffd", payload).encode("utf-8"))


def decode_utf16le(payload: str) -> DecodeResult:
    return Decoded(payload.encode("utf-16-le", errors="surrogatepass"))


def decode_ucs2(payload: str) -> DecodeResult:
    # Historical alias of utf-16le.
    return decode_utf16le(payload)


def decode_hex(payload: str) -> DecodeResult:
    if not _HEX_RE.fullmatch(payload):
        return Rejected(FailureReason.INVALID_HEX, "Invalid hex string: only 0-9, a-f and A-F are allowed")
    if len(payload) % 2:
        return Rejected(FailureReason.INVALID_HEX, f"Invalid hex string: odd length {len(payload)}")
    return Decoded(bytes.fromhex(payload))


def decode_base64(payload: str) -> DecodeResult:
    cleaned = _WHITESPACE_RE.sub("", payload)
    if not _BASE64_RE.fullmatch(cleaned):
        return Rejected(FailureReason.INVALID_BASE64_FORMAT, "Invalid base64 format: unexpected characters")
    if len(cleaned) % 4:
        return Rejected(
            FailureReason.INVALID_BASE64_LENGTH,
            f"Invalid base64 length: {len(cleaned)} is not a multiple of 4",
        )

    try:
        return Decoded(base64.b64decode(cleaned, validate=True))
    except binascii.Error as first_error:
        try:
            return Decoded(base64.b64decode(cleaned.translate(_URLSAFE_TO_STANDARD), validate=True))
        except binascii.Error:
            return Rejected(FailureReason.BASE64_DECODE_FAILURE, str(first_error))


DECODERS: dict[EncodingKind, Callable[[str], DecodeResult]] = {
    EncodingKind.BINARY: decode_binary,
    EncodingKind.ASCII: decode_ascii,
    EncodingKind.UTF8: decode_utf8,
    EncodingKind.UTF16LE: decode_utf16le,
    EncodingKind.UCS2: decode_ucs2,
    EncodingKind.HEX: decode_hex,
    EncodingKind.BASE64: decode_base64,
}


def decode(payload: str, encoding: EncodingKind) -> DecodeResult:
    return DECODERS[encoding](payload)
