# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Encoded Upload Ingestion API

Routes encoded form fields into the codec engine (one call per ``fileN``
field), forwards stored files to the enabled remote destinations and returns
every per-file outcome in one JSON response.
"""

import asyncio
import re
import shutil
import time
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from src.api.fields import extract_decode_requests, is_payload_field, non_payload_fields, read_body_fields
from src.api.schemas import RemoteUploadUpdate
from src.config.logging_config import setup_logger
from src.config.settings import Config, RemoteUploadConfig, config, validate_config_dependencies
from src.services.codec import CodecEngine, DecodeRequest, EncodingKind
from src.services.forwarding import RemoteDispatcher, StoredFile

logger = setup_logger(__name__)

DEFAULT_ENCODING = EncodingKind.UTF8.value

# Human-readable names used in response messages
ENCODING_LABELS = {
    EncodingKind.BASE64: "base64",
    EncodingKind.BINARY: "binary",
    EncodingKind.ASCII: "ASCII",
    EncodingKind.UTF8: "UTF-8",
    EncodingKind.UTF16LE: "UTF-16LE",
    EncodingKind.UCS2: "UCS-2",
    EncodingKind.HEX: "hex",
}

ENDPOINTS = [
    "/upload (standard multipart)",
    *(f"/upload-{kind.value}" for kind in ENCODING_LABELS),
    "/upload-encoded (universal with encoding parameter)",
    "/config/remote-upload (configure remote uploads)",
    "/config/remote-upload/status (get remote upload status)",
]

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


# ---------------------------------------------------------------------------
# Per-field processing
# ---------------------------------------------------------------------------
async def _process_field(
    decode_request: DecodeRequest,
    engine: CodecEngine,
    dispatcher: RemoteDispatcher,
) -> Dict[str, Any]:
    """Decode and store one field off the event loop, then run the post-persist hook."""
    outcome = await asyncio.to_thread(engine.decode_and_store, decode_request)
    record = outcome.to_dict()
    if outcome.success:
        stored = StoredFile(
            path=Path(outcome.stored_path),
            field_name=outcome.field_name,
            encoding=outcome.encoding,
        )
        forwarded = await dispatcher.forward_all(stored)
        record["remoteUploads"] = [f.to_dict() for f in forwarded]
    return record


async def _read_body(request: Request) -> Dict[str, Any]:
    settings: Config = request.app.state.settings
    return await read_body_fields(request, max_part_size=settings.MAX_FIELD_SIZE_MB * 1024 * 1024)


async def _process_body(
    request: Request, body: Dict[str, Any], encoding: str
) -> tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """Returns (per-file records in field order, echoed non-payload fields)."""
    settings: Config = request.app.state.settings
    decode_requests = extract_decode_requests(body, encoding)
    logger.info("Encoding: %s, file fields found: %s", encoding, len(decode_requests))

    dispatcher = RemoteDispatcher.from_config(
        request.app.state.remote_config,
        timeout=settings.REMOTE_UPLOAD_TIMEOUT,
        transport=request.app.state.forward_transport,
    )
    engine: CodecEngine = request.app.state.engine
    records = await asyncio.gather(*(_process_field(r, engine, dispatcher) for r in decode_requests))
    return list(records), non_payload_fields(body)


def _store_upload(upload: UploadFile, upload_dir: Path) -> Dict[str, Any]:
    original_name = Path(upload.filename or "upload").name
    path = upload_dir / f"{time.time_ns() // 1_000_000}-{_UNSAFE_NAME_CHARS.sub('_', original_name)}"
    with path.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return {
        "originalname": original_name,
        "mimetype": upload.content_type,
        "size": path.stat().st_size,
        "path": str(path),
    }


def _remote_status(remote: RemoteUploadConfig, include_configured: bool) -> Dict[str, Any]:
    """Public view of the remote configuration. Credentials are never included."""
    s3 = {"enabled": remote.s3.enabled, "bucket": remote.s3.bucket, "region": remote.s3.region}
    ftp = {
        "enabled": remote.ftp.enabled,
        "host": remote.ftp.host,
        "port": remote.ftp.port,
        "path": remote.ftp.path,
    }
    http = {"enabled": remote.http.enabled, "url": remote.http.url, "method": remote.http.method}
    if include_configured:
        s3["configured"] = remote.s3.configured
        ftp["configured"] = remote.ftp.configured
        http["configured"] = remote.http.configured
    return {"enabled": remote.enabled, "destinations": {"s3": s3, "ftp": ftp, "http": http}}


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(
    settings: Config = config,
    remote_config: RemoteUploadConfig | None = None,
    forward_transport=None,
) -> FastAPI:
    """
    Build the ingestion API.

    Args:
        settings: Server configuration (upload root, limits, timeouts)
        remote_config: Remote forwarding configuration; read from env when omitted
        forward_transport: Optional httpx transport for the forwarders (tests)

    Returns:
        FastAPI application with the upload root already created
    """
    app = FastAPI(title="Encoded Upload Ingestion API")

    engine = CodecEngine(settings.upload_path)
    engine.ensure_upload_dir()

    app.state.settings = settings
    app.state.engine = engine
    app.state.remote_config = remote_config or RemoteUploadConfig.from_env()
    app.state.forward_transport = forward_transport

    for problem in validate_config_dependencies():
        logger.warning("Configuration problem: %s", problem)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client = request.client.host if request.client else "-"
        logger.info("%s %s - %s", request.method, request.url.path, client)
        return await call_next(request)

    @app.post("/upload")
    async def upload_multipart(request: Request):
        """Standard multipart form-data: uploaded file parts are stored as-is."""
        form = await request.form(max_part_size=settings.MAX_FIELD_SIZE_MB * 1024 * 1024)
        files = []
        fields = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                stored = await asyncio.to_thread(_store_upload, value, engine.upload_dir)
                files.append({"fieldname": key, **stored})
            else:
                fields[key] = value
        logger.info("Files received: %s, fields: %s", len(files), len(fields))
        return {
            "message": "Received and stored standard multipart form-data",
            "files": files,
            "fields": fields,
        }

    def _register_fixed_route(kind: EncodingKind) -> None:
        label = ENCODING_LABELS[kind]

        async def upload_fixed(request: Request):
            files, fields = await _process_body(request, await _read_body(request), kind.value)
            return {
                "message": f"Received and stored multipart form-data with {label} encoding",
                "files": files,
                "fields": fields,
            }

        app.add_api_route(
            f"/upload-{kind.value}",
            upload_fixed,
            methods=["POST"],
            name=f"upload_{kind.name.lower()}",
            summary=f"Decode {label} encoded file fields",
        )

    for kind in ENCODING_LABELS:
        _register_fixed_route(kind)

    @app.post("/upload-encoded")
    async def upload_encoded(request: Request):
        """
        Universal endpoint: the ``encoding`` field selects the decoder (default utf8).

        - **fileN**: encoded payload
        - **fileN_ext**: optional extension hint
        """
        body = await _read_body(request)
        encoding = str(body.get("encoding") or DEFAULT_ENCODING)
        if not any(is_payload_field(key) for key in body):
            logger.error("No file fields found in request body")
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "No file fields found in request body",
                    "supportedEncodings": EncodingKind.names(),
                },
            )

        files, fields = await _process_body(request, body, encoding)
        return {
            "message": f"Received and stored multipart form-data with {encoding} encoding",
            "encoding": encoding,
            "files": files,
            "fields": fields,
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "server": settings.SERVER_NAME,
            "supportedEncodings": EncodingKind.names(),
            "remoteUpload": app.state.remote_config.toggles(),
            "endpoints": ENDPOINTS,
        }

    @app.post("/config/remote-upload")
    async def configure_remote_upload(request: Request):
        """Partially update the remote upload configuration of this server."""
        try:
            update = RemoteUploadUpdate.model_validate(await request.json())
        except (ValueError, ValidationError) as e:
            logger.error("Failed to update remote upload config: %s", e)
            raise HTTPException(
                status_code=400,
                detail={"error": "Failed to update remote upload configuration", "details": str(e)},
            ) from e

        app.state.remote_config = update.apply_to(app.state.remote_config)
        logger.info("Remote upload settings updated")
        return {
            "message": "Remote upload configuration updated successfully",
            "config": _remote_status(app.state.remote_config, include_configured=False),
        }

    @app.get("/config/remote-upload/status")
    async def remote_upload_status():
        return _remote_status(app.state.remote_config, include_configured=True)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
