"""Error handling — one exception per failure category."""

from edtexport.errors.exceptions import (
    CacheError,
    ConfigError,
    EdtExportError,
    FetchError,
    SanitizeError,
)

__all__ = [
    "EdtExportError",
    "FetchError",
    "SanitizeError",
    "CacheError",
    "ConfigError",
]
