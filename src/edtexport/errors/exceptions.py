"""Custom exception hierarchy for edtexport."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class EdtExportError(Exception):
    """Base exception for all edtexport errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class FetchError(EdtExportError):
    """Upstream export could not be retrieved.

    Examples: non-200 status, empty body, timeout, connection error.
    """

    def __init__(
        self,
        message: str = "",
        http_status: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.url = url


class SanitizeError(EdtExportError):
    """Raw export could not be parsed or re-serialized."""


class CacheError(EdtExportError):
    """Cache file could not be read or written."""

    def __init__(self, message: str = "", path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigError(EdtExportError):
    """Resolved configuration failed validation."""
