# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Remote forwarding: push persisted files to S3, an FTP gateway or an HTTP endpoint.
"""

from .base import ForwardOutcome, Forwarder, StoredFile
from .dispatcher import RemoteDispatcher, build_forwarders
from .forwarders import FtpGatewayForwarder, HttpForwarder, S3Forwarder

__all__ = [
    "ForwardOutcome",
    "Forwarder",
    "FtpGatewayForwarder",
    "HttpForwarder",
    "RemoteDispatcher",
    "S3Forwarder",
    "StoredFile",
    "build_forwarders",
]
