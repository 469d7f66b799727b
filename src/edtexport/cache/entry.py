"""Cache entry model."""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """The persisted sanitized document and when it was last written."""

    text: str
    modified_at: float
    path: Path

    @property
    def age_seconds(self) -> float:
        return max(0.0, time.time() - self.modified_at)

    def is_fresh(self, expiration_seconds: float) -> bool:
        return self.age_seconds < expiration_seconds

    @property
    def size_bytes(self) -> int:
        return len(self.text.encode("utf-8"))
