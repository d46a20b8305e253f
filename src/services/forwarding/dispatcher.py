# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Runs the enabled remote forwarders for one stored file.
"""

from __future__ import annotations

import httpx

from src.config.logging_config import setup_logger
from src.config.settings import RemoteUploadConfig

from .base import ForwardOutcome, Forwarder, StoredFile
from .forwarders import DEFAULT_TIMEOUT, FtpGatewayForwarder, HttpForwarder, S3Forwarder

logger = setup_logger(__name__)


def build_forwarders(
    remote: RemoteUploadConfig,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Forwarder]:
    """Enabled forwarders in s3, ftp, http order. Empty when the master switch is off."""
    if not remote.enabled:
        return []
    forwarders: list[Forwarder] = []
    if remote.s3.enabled:
        forwarders.append(S3Forwarder(remote.s3, timeout=timeout, transport=transport))
    if remote.ftp.enabled:
        forwarders.append(FtpGatewayForwarder(remote.ftp, timeout=timeout, transport=transport))
    if remote.http.enabled:
        forwarders.append(HttpForwarder(remote.http, timeout=timeout, transport=transport))
    return forwarders


class RemoteDispatcher:
    """Post-persist hook: forwards a stored file to every configured destination, one after another."""

    def __init__(self, forwarders: list[Forwarder]) -> None:
        self._forwarders = forwarders

    @classmethod
    def from_config(
        cls,
        remote: RemoteUploadConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RemoteDispatcher:
        return cls(build_forwarders(remote, timeout=timeout, transport=transport))

    @property
    def active(self) -> bool:
        return bool(self._forwarders)

    async def forward_all(self, stored_file: StoredFile) -> list[ForwardOutcome]:
        if not self._forwarders:
            return []
        logger.info("Starting remote uploads for %s", stored_file.filename)
        outcomes = []
        for forwarder in self._forwarders:
            outcomes.append(await forwarder.forward(stored_file))
        return outcomes
