"""Top-level entry points: get_timetable_xml(), TimetableExport."""

from __future__ import annotations

import logging

from edtexport.cache.store import FileCacheStore
from edtexport.config.hierarchy import load_export_config
from edtexport.config.schema import ExportConfig
from edtexport.fetch.client import ExportFetcher
from edtexport.sanitize.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "


class TimetableExport:
    """Cache check → fetch → sanitize → cache write."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        fetcher: ExportFetcher | None = None,
        sanitizer: Sanitizer | None = None,
        cache_store: FileCacheStore | None = None,
    ) -> None:
        self._config = config or ExportConfig()
        self._fetcher = fetcher or ExportFetcher(self._config)
        self._sanitizer = sanitizer or Sanitizer()
        self._cache_store = cache_store or FileCacheStore(self._config)

    @property
    def config(self) -> ExportConfig:
        return self._config

    @property
    def cache_store(self) -> FileCacheStore:
        return self._cache_store

    def get_sanitized_xml(self, force_refresh: bool = False) -> str:
        """Return the sanitized export, regenerating it if stale.

        Raises EdtExportError subclasses on any failure.
        """
        if not force_refresh:
            entry = self._cache_store.get_fresh()
            if entry is not None:
                return entry.text

        raw = self._fetcher.fetch()
        sanitized = self._sanitizer.sanitize(raw)
        self._cache_store.put(sanitized)
        return sanitized

    def get_sanitized_xml_safe(self) -> str:
        """Like get_sanitized_xml() but never raises.

        Failures come back as a string starting with ``"Error: "``.
        """
        try:
            return self.get_sanitized_xml()
        except Exception as e:
            logger.error("Failed to serve timetable export: %s", e, exc_info=True)
            return f"{ERROR_PREFIX}{_describe(e)}"

    def close(self) -> None:
        self._fetcher.close()


def _describe(exc: Exception) -> str:
    message = str(exc)
    return message if message else type(exc).__name__


# ── Module-level convenience functions ──


def get_timetable_xml(config: ExportConfig | None = None) -> str:
    """Sanitized export or an ``"Error: ..."`` string, with resolved config."""
    try:
        config = config or load_export_config()
    except Exception as e:
        logger.error("Failed to load configuration: %s", e, exc_info=True)
        return f"{ERROR_PREFIX}{_describe(e)}"

    export = TimetableExport(config)
    try:
        return export.get_sanitized_xml_safe()
    finally:
        export.close()
