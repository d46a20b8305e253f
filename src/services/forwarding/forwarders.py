# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
HTTP-based remote forwarders.

The S3 forwarder issues a plain PUT against the bucket URL and the FTP
forwarder posts to an HTTP gateway; neither speaks the native protocol.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.logging_config import setup_logger
from src.config.settings import FtpDestination, HttpDestination, S3Destination

from .base import ForwardOutcome, StoredFile

logger = setup_logger(__name__)

OCTET_STREAM = "application/octet-stream"
DEFAULT_TIMEOUT = 30.0


class _HttpxForwarder:
    """Shared plumbing: one short-lived AsyncClient per forward call."""

    destination = "remote"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def forward(self, stored_file: StoredFile) -> ForwardOutcome:
        filename = stored_file.filename
        logger.info("Starting %s upload: %s", self.destination, filename)
        try:
            content = stored_file.read_bytes()
            async with self._client() as client:
                details = await self._send(client, filename, content)
        except Exception as e:
            logger.error("Error uploading %s to %s: %s", filename, self.destination, e)
            return ForwardOutcome(destination=self.destination, success=False, error=str(e))

        logger.info("Uploaded %s to %s", filename, self.destination)
        return ForwardOutcome(destination=self.destination, success=True, size=len(content), details=details)

    async def _send(self, client: httpx.AsyncClient, filename: str, content: bytes) -> dict[str, Any]:
        raise NotImplementedError


class S3Forwarder(_HttpxForwarder):
    destination = "s3"

    def __init__(self, settings: S3Destination, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.settings = settings

    def object_url(self, filename: str) -> str:
        return f"https://{self.settings.bucket}.s3.{self.settings.region}.amazonaws.com/{filename}"

    async def _send(self, client: httpx.AsyncClient, filename: str, content: bytes) -> dict[str, Any]:
        url = self.object_url(filename)
        response = await client.put(
            url,
            content=content,
            headers={"Content-Type": OCTET_STREAM, "x-amz-acl": "public-read"},
            auth=(self.settings.access_key_id, self.settings.secret_access_key),
        )
        response.raise_for_status()
        return {"url": url}


class FtpGatewayForwarder(_HttpxForwarder):
    destination = "ftp"

    def __init__(self, settings: FtpDestination, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.settings = settings

    async def _send(self, client: httpx.AsyncClient, filename: str, content: bytes) -> dict[str, Any]:
        response = await client.post(
            self.settings.endpoint,
            files={"file": (filename, content, OCTET_STREAM)},
            data={"path": self.settings.path},
            auth=(self.settings.username, self.settings.password),
        )
        response.raise_for_status()
        return {"path": f"{self.settings.path.rstrip('/')}/{filename}"}


class HttpForwarder(_HttpxForwarder):
    destination = "http"

    def __init__(self, settings: HttpDestination, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.settings = settings

    async def _send(self, client: httpx.AsyncClient, filename: str, content: bytes) -> dict[str, Any]:
        response = await client.request(
            self.settings.method,
            self.settings.url,
            files={"file": (filename, content, OCTET_STREAM)},
            headers=self.settings.headers,
        )
        response.raise_for_status()
        return {"response": _response_body(response)}


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
