#!/usr/bin/env python3
"""
Encoding Exercise Script
Posts the same sample text through every encoding route of a running server,
prints the per-file results and cleans up the upload directory afterwards.

Usage:
    python scripts/exercise_encodings.py                 # empty uploads folder afterwards (default)
    python scripts/exercise_encodings.py --time-based    # only delete files from the last 5 minutes
    python scripts/exercise_encodings.py --keep          # leave every file in place
"""

import argparse
import base64
import sys
import time
from pathlib import Path
from typing import Dict, Optional

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.config.logging_config import setup_logger  # noqa: E402
from src.config.settings import config  # noqa: E402

logger = setup_logger(__name__)

SAMPLE_TEXT = "Hello World! This is a test file with special characters: ñáéíóú 测试 テスト"
ENCODINGS = ["utf8", "ascii", "binary", "base64", "hex", "utf-16le", "ucs2"]
RECENT_WINDOW_SECONDS = 300


def create_test_data(text: str = SAMPLE_TEXT) -> Dict[str, str]:
    """The sample text represented the way a client would send it for each encoding."""
    raw = text.encode("utf-8")
    return {
        "utf8": text,
        "ascii": text,
        "binary": raw.decode("latin-1"),
        "base64": base64.b64encode(raw).decode("ascii"),
        "hex": raw.hex(),
        "utf-16le": text,
        "ucs2": text,
    }


def _log_files(payload: dict) -> None:
    for record in payload.get("files", []):
        if record.get("success"):
            logger.info("  ok %s: %s bytes -> %s", record["fieldname"], record["size"], record["path"])
        else:
            logger.info("  failed %s: %s", record["fieldname"], record.get("error"))


def exercise_fixed_route(client: httpx.Client, encoding: str, data: str) -> Optional[dict]:
    """POST two payload fields (JSON body) to /upload-<encoding>."""
    logger.info("=== Testing %s encoding ===", encoding.upper())
    try:
        response = client.post(
            f"/upload-{encoding}",
            json={
                "file1": data,
                "file1_ext": "txt",
                "file2": data + "_second_file",
                "file2_ext": "json",
                "metadata": "test metadata",
            },
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Error testing %s: %s", encoding, e)
        return None

    payload = response.json()
    logger.info("Status: %s, message: %s", response.status_code, payload.get("message"))
    _log_files(payload)
    return payload


def exercise_universal_route(client: httpx.Client, encoding: str, data: str) -> Optional[dict]:
    """POST two payload fields (urlencoded form) to /upload-encoded."""
    logger.info("=== Testing universal endpoint with %s encoding ===", encoding.upper())
    try:
        response = client.post(
            "/upload-encoded",
            data={
                "encoding": encoding,
                "file1": data,
                "file1_ext": "jpg",
                "file2": data + "_universal_test",
                "file2_ext": "png",
                "metadata": "universal test metadata",
            },
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Error testing universal %s: %s", encoding, e)
        return None

    payload = response.json()
    logger.info("Status: %s, message: %s", response.status_code, payload.get("message"))
    _log_files(payload)
    return payload


def check_health(client: httpx.Client) -> Optional[dict]:
    logger.info("=== Testing health endpoint ===")
    try:
        response = client.get("/health")
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Error testing health endpoint: %s", e)
        return None
    logger.info("Server info", extra={"health": response.json()})
    return response.json()


def cleanup_uploads(upload_dir: Path, empty_folder: bool = True, now: Optional[float] = None) -> int:
    """
    Delete test files from the upload directory.

    Args:
        upload_dir: Directory the server writes into
        empty_folder: True removes every file; False only files modified in the last 5 minutes
        now: Reference time for the age check (defaults to the current time)

    Returns:
        Number of deleted files. Hidden files are never touched.
    """
    if not upload_dir.exists():
        logger.info("Uploads directory does not exist: %s", upload_dir)
        return 0

    now = time.time() if now is None else now
    deleted = 0
    for path in upload_dir.iterdir():
        if path.name.startswith(".") or not path.is_file():
            continue
        if not empty_folder and now - path.stat().st_mtime >= RECENT_WINDOW_SECONDS:
            continue
        path.unlink()
        deleted += 1

    mode = "emptied folder" if empty_folder else "time-based cleanup"
    logger.info("Deleted %s files (%s)", deleted, mode)
    return deleted


def main():
    parser = argparse.ArgumentParser(description="Exercise every encoding route of the ingestion server")
    parser.add_argument("--base-url", default=f"http://localhost:{config.PORT}", help="Server base URL")
    parser.add_argument("--upload-dir", default=str(config.upload_path), help="Server upload directory")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--time-based", action="store_true", help="Only delete files from the last 5 minutes")
    mode.add_argument("--keep", action="store_true", help="Do not delete any files")
    args = parser.parse_args()

    logger.info("Starting encoding exercise against %s", args.base_url)
    test_data = create_test_data()

    with httpx.Client(base_url=args.base_url, timeout=30) as client:
        check_health(client)
        for encoding in ENCODINGS:
            exercise_fixed_route(client, encoding, test_data[encoding])
        for encoding in ENCODINGS:
            exercise_universal_route(client, encoding, test_data[encoding])

    logger.info("All encodings exercised")

    if not args.keep:
        cleanup_uploads(Path(args.upload_dir), empty_folder=not args.time_based)
    logger.info("Remaining files are in %s", args.upload_dir)


if __name__ == "__main__":
    main()
