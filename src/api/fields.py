# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Request body parsing and payload-field detection.

A key starting with ``file`` and not ending with ``_ext`` is a payload field;
``<key>_ext`` carries its extension hint. Everything else is echoed back.
"""

import json
from typing import Any

from fastapi import HTTPException, Request
from starlette.datastructures import UploadFile

from src.services.codec import DecodeRequest

FILE_FIELD_PREFIX = "file"
EXTENSION_SUFFIX = "_ext"


def is_payload_field(key: str) -> bool:
    return key.startswith(FILE_FIELD_PREFIX) and not key.endswith(EXTENSION_SUFFIX)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value) if isinstance(value, (dict, list)) else str(value)


async def read_body_fields(request: Request, max_part_size: int) -> dict[str, Any]:
    """
    Read a urlencoded, multipart or JSON body into a flat dict.

    Repeated form keys keep their last value. Uploaded file parts are skipped:
    encoded routes only look at text fields.

    Raises:
        HTTPException: 400 if a JSON body is malformed or not an object.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Malformed JSON body: {e}") from e
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object")
        return body

    form = await request.form(max_part_size=max_part_size)
    return {key: value for key, value in form.multi_items() if not isinstance(value, UploadFile)}


def extract_decode_requests(body: dict[str, Any], encoding: str) -> list[DecodeRequest]:
    """One DecodeRequest per payload field, in body order."""
    requests = []
    for key, value in body.items():
        if not is_payload_field(key):
            continue
        hint = body.get(f"{key}{EXTENSION_SUFFIX}")
        requests.append(
            DecodeRequest(
                payload=_as_text(value),
                encoding=encoding,
                field_name=key,
                extension_hint=_as_text(hint) or None,
            )
        )
    return requests


def non_payload_fields(body: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in body.items() if not is_payload_field(key)}
