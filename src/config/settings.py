"""
Configuration settings for the Encoded Upload Ingestion Service
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Use find_dotenv() to locate .env regardless of the current working directory.
# Falls back to an explicit path relative to this file (project root) if not found.
_dotenv_path = find_dotenv(usecwd=True) or str(Path(__file__).resolve().parent.parent.parent / ".env")
load_dotenv(_dotenv_path)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or default).strip().lower() in ("true", "1", "yes")


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


# ============================================
# Environment-based Configuration
# ============================================


class Config:
    """
    Centralized configuration loaded from environment variables.
    Edit .env file to change these values.
    """

    # Server
    HOST: str = _env_str("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3002"))
    SERVER_NAME: str = "multipartServer"

    # Default level for every setup_logger() logger
    LOG_LEVEL: str = _env_str("LOG_LEVEL", "INFO").upper()

    # Decoded files land here; created once at startup.
    UPLOAD_DIR: str = _env_str("UPLOAD_DIR", "uploads")

    # Form bodies larger than this are refused by the form parser.
    MAX_FIELD_SIZE_MB: int = int(os.getenv("MAX_FIELD_SIZE_MB", "50"))

    # Seconds allowed for each remote forward call
    REMOTE_UPLOAD_TIMEOUT: float = float(os.getenv("REMOTE_UPLOAD_TIMEOUT", "30"))

    @property
    def upload_path(self) -> Path:
        return Path(self.UPLOAD_DIR).resolve()


# Singleton instance
config = Config()


# ============================================
# Remote upload destinations
# ============================================


@dataclass
class S3Destination:
    enabled: bool = False
    bucket: str = ""
    region: str = "us-east-1"
    access_key_id: str = ""
    secret_access_key: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.bucket)


@dataclass
class FtpDestination:
    enabled: bool = False
    host: str = ""
    port: int = 21
    username: str = ""
    password: str = ""
    path: str = "/uploads"
    gateway_url: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.host and self.username)

    @property
    def endpoint(self) -> str:
        """Gateway that accepts the multipart upload on behalf of the FTP server."""
        return self.gateway_url or f"http://{self.host}:{self.port}"


@dataclass
class HttpDestination:
    enabled: bool = False
    url: str = ""
    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def configured(self) -> bool:
        return bool(self.url)


@dataclass
class RemoteUploadConfig:
    """Remote forwarding toggles, owned by one application instance."""

    enabled: bool = False
    s3: S3Destination = field(default_factory=S3Destination)
    ftp: FtpDestination = field(default_factory=FtpDestination)
    http: HttpDestination = field(default_factory=HttpDestination)

    @classmethod
    def from_env(cls) -> "RemoteUploadConfig":
        return cls(
            enabled=_env_flag("REMOTE_UPLOAD_ENABLED"),
            s3=S3Destination(
                enabled=_env_flag("S3_UPLOAD_ENABLED"),
                bucket=_env_str("S3_BUCKET"),
                region=_env_str("S3_REGION", "us-east-1"),
                access_key_id=_env_str("S3_ACCESS_KEY_ID"),
                secret_access_key=_env_str("S3_SECRET_ACCESS_KEY"),
            ),
            ftp=FtpDestination(
                enabled=_env_flag("FTP_UPLOAD_ENABLED"),
                host=_env_str("FTP_HOST"),
                port=int(os.getenv("FTP_PORT") or "21"),
                username=_env_str("FTP_USERNAME"),
                password=_env_str("FTP_PASSWORD"),
                path=_env_str("FTP_PATH", "/uploads"),
                gateway_url=_env_str("FTP_GATEWAY_URL"),
            ),
            http=HttpDestination(
                enabled=_env_flag("HTTP_UPLOAD_ENABLED"),
                url=_env_str("HTTP_UPLOAD_URL"),
                method=_env_str("HTTP_UPLOAD_METHOD", "POST").upper(),
                headers=_parse_headers(os.getenv("HTTP_UPLOAD_HEADERS")),
            ),
        )

    def toggles(self) -> dict:
        return {
            "enabled": self.enabled,
            "destinations": {
                "s3": self.s3.enabled,
                "ftp": self.ftp.enabled,
                "http": self.http.enabled,
            },
        }


def _parse_headers(raw: str | None) -> dict[str, str]:
    """Parse HTTP_UPLOAD_HEADERS (a JSON object). Malformed input yields no headers."""
    if not raw or not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if not isinstance(parsed, dict):
        return {}
    return {str(k): str(v) for k, v in parsed.items()}


def validate_config_dependencies() -> list[str]:
    """
    Cross-field validation of the loaded configuration.

    Returns a list of human-readable problems; empty when everything is consistent.
    Called at startup so misconfiguration shows up in the logs instead of as
    silent forwarding failures.
    """
    errors: list[str] = []

    if not 0 < config.PORT < 65536:
        errors.append(f"PORT must be between 1 and 65535 (got {config.PORT})")
    if config.MAX_FIELD_SIZE_MB <= 0:
        errors.append(f"MAX_FIELD_SIZE_MB must be positive (got {config.MAX_FIELD_SIZE_MB})")
    if config.REMOTE_UPLOAD_TIMEOUT <= 0:
        errors.append(f"REMOTE_UPLOAD_TIMEOUT must be positive (got {config.REMOTE_UPLOAD_TIMEOUT})")
    if not config.UPLOAD_DIR:
        errors.append("UPLOAD_DIR must not be empty")
    if config.LOG_LEVEL not in LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got {config.LOG_LEVEL})")

    raw_headers = os.getenv("HTTP_UPLOAD_HEADERS", "").strip()
    if raw_headers:
        try:
            if not isinstance(json.loads(raw_headers), dict):
                errors.append("HTTP_UPLOAD_HEADERS must be a JSON object")
        except json.JSONDecodeError:
            errors.append("HTTP_UPLOAD_HEADERS is not valid JSON")

    remote = RemoteUploadConfig.from_env()
    if remote.enabled:
        if remote.s3.enabled and not remote.s3.configured:
            errors.append("S3_UPLOAD_ENABLED=true but S3_BUCKET is missing")
        if remote.ftp.enabled and not remote.ftp.configured:
            errors.append("FTP_UPLOAD_ENABLED=true but FTP_HOST or FTP_USERNAME is missing")
        if remote.ftp.enabled and not 0 < remote.ftp.port < 65536:
            errors.append(f"FTP_PORT must be between 1 and 65535 (got {remote.ftp.port})")
        if remote.http.enabled and not remote.http.configured:
            errors.append("HTTP_UPLOAD_ENABLED=true but HTTP_UPLOAD_URL is missing")

    return errors
