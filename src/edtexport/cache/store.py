"""Single-entry file cache for the sanitized export."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from edtexport.cache.entry import CacheEntry
from edtexport.config.schema import ExportConfig
from edtexport.errors.exceptions import CacheError

logger = logging.getLogger(__name__)


class FileCacheStore:
    """One named file in one named folder; age comes from the file's mtime.

    No locking. Concurrent regenerations race and the last writer wins.
    """

    def __init__(
        self,
        config: ExportConfig,
        path: Path | None = None,
    ) -> None:
        self._path = path or config.cache_path
        self._expiration_seconds = config.expiration_seconds

    @property
    def path(self) -> Path:
        return self._path

    @property
    def expiration_seconds(self) -> float:
        return self._expiration_seconds

    def get(self) -> CacheEntry | None:
        """Return the cached text with its timestamp, or None if absent."""
        try:
            modified_at = self._path.stat().st_mtime
            text = self._path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CacheError(f"Cannot read cache file: {e}", path=self._path) from e
        return CacheEntry(text=text, modified_at=modified_at, path=self._path)

    def put(self, text: str) -> CacheEntry:
        """Create or overwrite the entry.

        Written to a sibling temp file and renamed into place so readers see
        either the old document or the new one, never a partial write.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(text)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            modified_at = self._path.stat().st_mtime
        except OSError as e:
            raise CacheError(f"Cannot write cache file: {e}", path=self._path) from e

        logger.info("Cached sanitized export at %s (%d bytes)", self._path, len(text))
        return CacheEntry(text=text, modified_at=modified_at, path=self._path)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return entry.is_fresh(self._expiration_seconds)

    def get_fresh(self) -> CacheEntry | None:
        """Return the entry only if it is inside the staleness window."""
        entry = self.get()
        if entry is None:
            logger.info("Cache miss: %s does not exist", self._path)
            return None
        if not self.is_fresh(entry):
            logger.info(
                "Cache stale: age %.0fs >= %.0fs", entry.age_seconds, self._expiration_seconds
            )
            return None
        logger.info("Cache hit: age %.0fs", entry.age_seconds)
        return entry

    def clear(self) -> bool:
        """Delete the entry. Returns True if one existed."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheError(f"Cannot delete cache file: {e}", path=self._path) from e
        return True
