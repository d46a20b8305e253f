# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Request models for the remote-upload configuration endpoint.

Every field is optional: the body is a partial update and only keys that were
sent are applied. Wire names are camelCase.
"""

from dataclasses import replace
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.config.settings import RemoteUploadConfig


class _PartialUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class S3Update(_PartialUpdate):
    enabled: Optional[bool] = None
    bucket: Optional[str] = None
    region: Optional[str] = None
    access_key_id: Optional[str] = Field(None, alias="accessKeyId")
    secret_access_key: Optional[str] = Field(None, alias="secretAccessKey")


class FtpUpdate(_PartialUpdate):
    enabled: Optional[bool] = None
    host: Optional[str] = None
    port: Optional[int] = Field(None, gt=0, lt=65536)
    username: Optional[str] = None
    password: Optional[str] = None
    path: Optional[str] = None
    gateway_url: Optional[str] = Field(None, alias="gatewayUrl")


class HttpUpdate(_PartialUpdate):
    enabled: Optional[bool] = None
    url: Optional[str] = None
    method: Optional[str] = None
    headers: Optional[Dict[str, str]] = None


class DestinationsUpdate(_PartialUpdate):
    s3: Optional[S3Update] = None
    ftp: Optional[FtpUpdate] = None
    http: Optional[HttpUpdate] = None


class RemoteUploadUpdate(_PartialUpdate):
    """Body of POST /config/remote-upload"""

    enabled: Optional[bool] = None
    destinations: Optional[DestinationsUpdate] = None

    def apply_to(self, current: RemoteUploadConfig) -> RemoteUploadConfig:
        """Return a new configuration with the sent keys applied on top of ``current``."""
        updated = current
        if self.enabled is not None:
            updated = replace(updated, enabled=self.enabled)
        if self.destinations is None:
            return updated

        for name in ("s3", "ftp", "http"):
            section = getattr(self.destinations, name)
            if section is None:
                continue
            changes = {k: v for k, v in section.model_dump(exclude_unset=True).items() if v is not None}
            if name == "http" and changes.get("method"):
                changes["method"] = changes["method"].upper()
            updated = replace(updated, **{name: replace(getattr(updated, name), **changes)})
        return updated
