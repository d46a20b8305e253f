# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Remote forwarding contract.

A forwarder receives a file the codec engine already persisted and pushes a
copy somewhere else. Forwarding is a post-persist hook: its outcome is
reported next to the stored file but never changes whether the field
succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class StoredFile:
    """A decoded payload that is already on local disk."""

    path: Path
    field_name: str
    encoding: str

    @property
    def filename(self) -> str:
        return self.path.name

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass
class ForwardOutcome:
    destination: str
    success: bool
    size: int | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)  # url / path / response, per destination

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"destination": self.destination, "success": self.success}
        if self.success:
            result.update(self.details)
            result["size"] = self.size
        else:
            result["error"] = self.error
        return result


@runtime_checkable
class Forwarder(Protocol):
    """Contract for remote destinations (object storage, FTP gateway, HTTP endpoint)."""

    destination: str

    async def forward(self, stored_file: StoredFile) -> ForwardOutcome:
        """Push one stored file. Failures are returned, not raised."""
        ...
