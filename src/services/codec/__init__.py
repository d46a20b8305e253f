# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Codec service: decode text-encoded payload fields into bytes and persist them.
"""

from .engine import CodecEngine
from .models import (
    DecodeFailure,
    DecodeOutcome,
    DecodeRequest,
    DecodeSuccess,
    EncodingKind,
    FailureReason,
)

__all__ = [
    "CodecEngine",
    "DecodeFailure",
    "DecodeOutcome",
    "DecodeRequest",
    "DecodeSuccess",
    "EncodingKind",
    "FailureReason",
]
