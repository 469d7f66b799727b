"""Pydantic model for the resolved export configuration."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator

from edtexport.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_FILE,
    DEFAULT_CACHE_FOLDER,
    DEFAULT_EXPIRATION_SECONDS,
    DEFAULT_IDENTITY_HEADER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOKEN,
    DEFAULT_URL_TEMPLATE,
)


class ExportConfig(BaseModel):
    """Everything the fetcher, cache store and web app need.

    Passed explicitly at construction so tests can use short expirations
    and an isolated cache directory.
    """

    url_template: str = DEFAULT_URL_TEMPLATE
    token: str = DEFAULT_TOKEN
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_folder: str = DEFAULT_CACHE_FOLDER
    cache_file: str = DEFAULT_CACHE_FILE
    expiration_seconds: float = Field(default=DEFAULT_EXPIRATION_SECONDS, ge=0)
    identity_header: str = DEFAULT_IDENTITY_HEADER
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("url_template")
    @classmethod
    def _needs_token_placeholder(cls, value: str) -> str:
        if "{token}" not in value:
            raise ValueError("url_template must contain a '{token}' placeholder")
        return value

    @field_validator("cache_folder", "cache_file")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError(f"expected a plain file or folder name, got {value!r}")
        return value

    @property
    def cache_path(self) -> Path:
        return self.cache_dir.expanduser() / self.cache_folder / self.cache_file

    def build_url(self, token: str | None = None) -> str:
        token = self.token if token is None else token
        return self.url_template.format(token=quote(token, safe=""))
