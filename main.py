#!/usr/bin/env python3
"""
Encoded Upload Ingestion Service - Main Entry Point

Usage:
    python main.py                  # Run the HTTP server (default)
    python main.py --check-config   # Report configuration problems and exit
"""

import sys
from pathlib import Path

from src.config.logging_config import logger

# Ensure project root is in path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.config.settings import RemoteUploadConfig, config, validate_config_dependencies  # noqa: E402


def run_server():
    """Launch the ingestion API with uvicorn"""
    import uvicorn

    from src.api.ingest import app

    remote = app.state.remote_config
    logger.info("Multipart server running on port %s", config.PORT)
    logger.info("Supported encodings: binary, ascii, utf8, utf-16le, ucs2, hex, base64")
    logger.info("Upload directory: %s", config.upload_path)
    logger.info("Health check: http://localhost:%s/health", config.PORT)
    logger.info("Remote upload enabled: %s", remote.enabled)
    if remote.enabled:
        logger.info(
            "Remote destinations: S3(%s), FTP(%s), HTTP(%s)",
            remote.s3.enabled,
            remote.ftp.enabled,
            remote.http.enabled,
        )
    uvicorn.run(app, host=config.HOST, port=config.PORT)


def check_config() -> int:
    """Log every configuration problem; exit status 1 if any were found."""
    problems = validate_config_dependencies()
    for problem in problems:
        logger.error("Configuration problem: %s", problem)
    if not problems:
        logger.info("Configuration OK", extra={"remote_upload": RemoteUploadConfig.from_env().toggles()})
    return 1 if problems else 0


def main():
    """Main entry point"""
    if len(sys.argv) > 1 and sys.argv[1] == "--check-config":
        sys.exit(check_config())
    run_server()


if __name__ == "__main__":
    main()
