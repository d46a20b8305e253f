"""
Pytest configuration and shared fixtures.
Run from project root: python -m pytest tests/ -v
"""

import os
import sys
import tempfile
from pathlib import Path

# Set env vars before any app imports (ensures deterministic test behavior)
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="encoded-ingest-tests-")
os.environ["REMOTE_UPLOAD_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Ensure project root is on path when running tests
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
