"""
Shared test helpers. Used across unit tests to avoid duplication.
"""

from pathlib import Path

from src.config.settings import Config
from src.services.codec import DecodeRequest


def make_decode_request(**overrides: object) -> DecodeRequest:
    """Create a DecodeRequest with sensible defaults for tests."""
    defaults: dict[str, object] = {
        "payload": "48656c6c6f",
        "encoding": "hex",
        "field_name": "file1",
        "extension_hint": None,
    }
    defaults.update(overrides)
    return DecodeRequest(**defaults)


def make_settings(upload_dir: Path, **overrides: object) -> Config:
    """A Config instance pointed at a test upload directory."""
    settings = Config()
    settings.UPLOAD_DIR = str(upload_dir)
    for attr, value in overrides.items():
        setattr(settings, attr, value)
    return settings


def fixed_clock(millis: int = 1_700_000_000_000):
    return lambda: millis
