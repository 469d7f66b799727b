"""Synchronous HTTP client for the upstream timetable export."""

from __future__ import annotations

import logging

import httpx

from edtexport.config.schema import ExportConfig
from edtexport.errors.exceptions import FetchError

logger = logging.getLogger(__name__)


class ExportFetcher:
    """Downloads the raw XML export. No retry: failures propagate."""

    def __init__(
        self,
        config: ExportConfig,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.timeout_seconds)

    def fetch(self, token: str | None = None) -> str:
        """GET the export and return its body.

        Raises FetchError on transport failure, non-200 status or a blank body.
        """
        url = self._config.build_url(token)
        logger.debug("Fetching timetable export from %s", _redact_url(self._config))
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(
                f"Request to upstream failed: {type(e).__name__}", url=_redact_url(self._config)
            ) from e

        if response.status_code != 200:
            raise FetchError(
                f"Upstream returned HTTP {response.status_code}",
                http_status=response.status_code,
                url=_redact_url(self._config),
            )

        body = response.text
        if not body or not body.strip():
            raise FetchError(
                "Upstream returned an empty body",
                http_status=response.status_code,
                url=_redact_url(self._config),
            )

        logger.debug("Fetched %d characters", len(body))
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ExportFetcher:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _redact_url(config: ExportConfig) -> str:
    """The request URL with the token masked, safe for logs and messages."""
    return config.url_template.format(token="***")
