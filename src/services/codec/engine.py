# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Codec-and-Persist Engine

Decodes one encoded payload field into bytes, infers its extension and writes
it to the upload directory. Every path ends in a DecodeOutcome; the engine
never raises across its boundary.
"""

from __future__ import annotations

import contextlib
import re
import time
from collections.abc import Callable
from pathlib import Path

from src.config.logging_config import setup_logger

from .decoders import Rejected, decode
from .extensions import infer_extension
from .models import (
    DecodeFailure,
    DecodeOutcome,
    DecodeRequest,
    DecodeSuccess,
    EncodingKind,
    FailureReason,
)

logger = setup_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class CodecEngine:
    """Stateless decode → infer → write pipeline rooted at one upload directory."""

    def __init__(self, upload_dir: str | Path, clock: Callable[[], int] = _now_millis) -> None:
        self.upload_dir = Path(upload_dir)
        self._clock = clock

    def ensure_upload_dir(self) -> Path:
        """Create the upload root if absent. Safe to call repeatedly."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    def build_filename(self, field_name: str, encoding: EncodingKind, extension: str) -> str:
        """``<unixMillis>-<fieldName>-<encodingName><ext>``; the field name is made path-safe."""
        safe_field = _UNSAFE_NAME_CHARS.sub("_", field_name)
        return f"{self._clock()}-{safe_field}-{encoding.value}{extension}"

    def decode_and_store(self, request: DecodeRequest) -> DecodeOutcome:
        """
        Decode one payload field and persist it.

        Args:
            request: Payload text, encoding name, field name and optional extension hint.

        Returns:
            DecodeSuccess with the stored path and byte length, or DecodeFailure
            with a reason code. A failure never leaves a file behind.
        """
        field_name = request.field_name
        logger.info("Processing %s with %s encoding", field_name, request.encoding)

        encoding = EncodingKind.from_name(request.encoding)
        if encoding is None:
            return self._fail(
                field_name,
                request.encoding,
                FailureReason.UNSUPPORTED_ENCODING,
                f"Unsupported encoding: {request.encoding}",
            )

        if not request.payload:
            return self._fail(field_name, encoding.value, FailureReason.EMPTY_PAYLOAD, "Payload is empty")

        result = decode(request.payload, encoding)
        if isinstance(result, Rejected):
            return self._fail(field_name, encoding.value, result.reason, result.message)

        data = result.data
        if not data:
            return self._fail(field_name, encoding.value, FailureReason.EMPTY_PAYLOAD, "Decoded payload is empty")

        extension = infer_extension(data, encoding, request.extension_hint)
        path = self.upload_dir / self.build_filename(field_name, encoding, extension)

        try:
            path.write_bytes(data)
        except OSError as e:
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)
            return self._fail(field_name, encoding.value, FailureReason.IO_WRITE_FAILURE, str(e))

        logger.info("File saved: %s (%s bytes)", path.name, len(data))
        return DecodeSuccess(
            field_name=field_name,
            encoding=encoding.value,
            byte_length=len(data),
            stored_path=str(path),
            extension=extension,
        )

    @staticmethod
    def _fail(field_name: str, encoding: str, reason: FailureReason, message: str) -> DecodeFailure:
        logger.warning(
            "Failed to process %s with %s encoding: %s (%s)", field_name, encoding, message, reason.value
        )
        return DecodeFailure(field_name=field_name, encoding=encoding, reason=reason, message=message)
