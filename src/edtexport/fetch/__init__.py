"""Upstream export fetcher."""

from edtexport.fetch.client import ExportFetcher

__all__ = ["ExportFetcher"]
