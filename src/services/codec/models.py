# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Codec Domain Models

Pure data structures for the decode-and-store pipeline: the closed set of
supported encodings, the per-field request, and the success/failure outcomes
that the router serialises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EncodingKind(str, Enum):
    """Text encodings a payload field may arrive in. Values are the wire names."""

    BINARY = "binary"
    ASCII = "ascii"
    UTF8 = "utf8"
    UTF16LE = "utf-16le"
    UCS2 = "ucs2"
    HEX = "hex"
    BASE64 = "base64"

    @classmethod
    def from_name(cls, name: str | None) -> EncodingKind | None:
        """Resolve a caller-supplied encoding name. Unknown names return None."""
        if not name:
            return None
        key = name.strip().lower()
        return _ALIASES.get(key) or _BY_VALUE.get(key)

    @classmethod
    def names(cls) -> list[str]:
        return [kind.value for kind in cls]


_BY_VALUE = {kind.value: kind for kind in EncodingKind}
_ALIASES = {
    "utf-8": EncodingKind.UTF8,
    "utf16le": EncodingKind.UTF16LE,
    "ucs-2": EncodingKind.UCS2,
}


class FailureReason(str, Enum):
    UNSUPPORTED_ENCODING = "unsupported-encoding"
    INVALID_HEX = "invalid-hex"
    INVALID_BASE64_FORMAT = "invalid-base64-format"
    INVALID_BASE64_LENGTH = "invalid-base64-length"
    BASE64_DECODE_FAILURE = "base64-decode-failure"
    EMPTY_PAYLOAD = "empty-payload"
    IO_WRITE_FAILURE = "io-write-failure"


@dataclass(frozen=True)
class DecodeRequest:
    """One payload field as extracted by the router."""

    payload: str
    encoding: str  # caller-supplied name, resolved by the engine
    field_name: str
    extension_hint: str | None = None


@dataclass(frozen=True)
class DecodeSuccess:
    field_name: str
    encoding: str
    byte_length: int
    stored_path: str
    extension: str

    success: bool = field(default=True, init=False)

    def to_dict(self) -> dict:
        return {
            "fieldname": self.field_name,
            "encoding": self.encoding,
            "size": self.byte_length,
            "path": self.stored_path,
            "extension": self.extension,
            "success": True,
        }


@dataclass(frozen=True)
class DecodeFailure:
    field_name: str
    encoding: str
    reason: FailureReason
    message: str

    success: bool = field(default=False, init=False)

    def to_dict(self) -> dict:
        return {
            "fieldname": self.field_name,
            "encoding": self.encoding,
            "reason": self.reason.value,
            "error": f"Failed to process {self.encoding} data: {self.message}",
            "success": False,
        }


DecodeOutcome = DecodeSuccess | DecodeFailure
