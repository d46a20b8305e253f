# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
File extension inference for decoded payloads.
"""

from __future__ import annotations

import re

from .models import EncodingKind

DEFAULT_EXTENSION = ".bin"

# Checked in order; first match wins.
BINARY_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\xff\xd8\xff", ".jpg"),
    (b"\x89PNG", ".png"),
    (b"GIF", ".gif"),
    (b"BM", ".bmp"),
]

_INVALID_EXTENSION_CHARS = re.compile(r"[^A-Za-z0-9.]")


def normalize_extension(hint: str | None) -> str | None:
    """Normalise a caller-supplied extension hint to ``.ext`` form.

    Returns None when the hint is missing or nothing usable survives cleaning.
    """
    if not hint:
        return None
    ext = hint if hint.startswith(".") else f".{hint}"
    ext = _INVALID_EXTENSION_CHARS.sub("", ext)
    if ext in ("", "."):
        return None
    return ext


def sniff_extension(data: bytes) -> str | None:
    for signature, ext in BINARY_SIGNATURES:
        if data.startswith(signature):
            return ext
    return None


def infer_extension(data: bytes, encoding: EncodingKind, hint: str | None = None) -> str:
    """Pick the stored file's extension: explicit hint, then signature sniffing (base64 only), then .bin."""
    ext = normalize_extension(hint)
    if ext:
        return ext
    if encoding is EncodingKind.BASE64:
        return sniff_extension(data) or DEFAULT_EXTENSION
    return DEFAULT_EXTENSION
