"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Upstream export
DEFAULT_URL_TEMPLATE = "https://edt.example-lycee.fr/api/export/edt.xml?token={token}"
DEFAULT_TOKEN = ""
DEFAULT_TIMEOUT_SECONDS = 30.0

# Cache location and staleness window
DEFAULT_CACHE_DIR = Path.home() / ".edtexport"
DEFAULT_CACHE_FOLDER = "edt"
DEFAULT_CACHE_FILE = "edt_sanitized.xml"
DEFAULT_EXPIRATION_SECONDS = 1800

# Web
DEFAULT_IDENTITY_HEADER = "X-Forwarded-User"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "url_template": DEFAULT_URL_TEMPLATE,
        "token": DEFAULT_TOKEN,
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "cache_dir": DEFAULT_CACHE_DIR,
        "cache_folder": DEFAULT_CACHE_FOLDER,
        "cache_file": DEFAULT_CACHE_FILE,
        "expiration_seconds": DEFAULT_EXPIRATION_SECONDS,
        "identity_header": DEFAULT_IDENTITY_HEADER,
        "log_level": DEFAULT_LOG_LEVEL,
    }
