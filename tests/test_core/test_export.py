"""Tests for the cache → fetch → sanitize → cache pipeline."""

import os
import time

import httpx
import pytest

from edtexport.cache.store import FileCacheStore
from edtexport.core import ERROR_PREFIX, TimetableExport, get_timetable_xml
from edtexport.errors.exceptions import FetchError
from edtexport.fetch.client import ExportFetcher


class _Upstream:
    """MockTransport handler that counts requests."""

    def __init__(self, status: int = 200, body: str = "") -> None:
        self.status = status
        self.body = body
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(self.status, text=self.body)


def _export(config, upstream: _Upstream) -> TimetableExport:
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    return TimetableExport(config, fetcher=ExportFetcher(config, client=client))


def _backdate(path, seconds: float) -> None:
    then = time.time() - seconds
    os.utime(path, (then, then))


class TestGetSanitizedXml:
    def test_miss_fetches_sanitizes_and_caches(self, export_config, raw_export):
        upstream = _Upstream(body=raw_export)
        export = _export(export_config, upstream)
        text = export.get_sanitized_xml()
        assert upstream.calls == 1
        assert "DateNaissance" not in text
        assert export.cache_store.get().text == text

    def test_fresh_hit_is_identical_and_skips_fetch(self, export_config, raw_export):
        upstream = _Upstream(body=raw_export)
        export = _export(export_config, upstream)
        first = export.get_sanitized_xml()
        second = export.get_sanitized_xml()
        assert second == first
        assert upstream.calls == 1

    def test_stale_entry_triggers_exactly_one_fetch(self, export_config, raw_export):
        upstream = _Upstream(body=raw_export)
        export = _export(export_config, upstream)
        export.get_sanitized_xml()
        _backdate(export.cache_store.path, 1801)
        export.get_sanitized_xml()
        export.get_sanitized_xml()
        assert upstream.calls == 2

    def test_serves_existing_fresh_entry_without_fetch(self, export_config):
        FileCacheStore(export_config).put("<cached/>")
        upstream = _Upstream(body="<EDT/>")
        assert _export(export_config, upstream).get_sanitized_xml() == "<cached/>"
        assert upstream.calls == 0

    def test_hit_preserves_carriage_returns(self, export_config):
        upstream = _Upstream(body="<EDT><Memo>ligne1&#13;\nligne2</Memo></EDT>")
        export = _export(export_config, upstream)
        first = export.get_sanitized_xml()
        second = export.get_sanitized_xml()
        assert "ligne1\r\nligne2" in first
        assert second == first
        assert upstream.calls == 1

    def test_force_refresh_bypasses_cache(self, export_config, raw_export):
        FileCacheStore(export_config).put("<cached/>")
        upstream = _Upstream(body=raw_export)
        text = _export(export_config, upstream).get_sanitized_xml(force_refresh=True)
        assert upstream.calls == 1
        assert text != "<cached/>"

    def test_fetch_failure_raises_and_keeps_cache(self, export_config):
        FileCacheStore(export_config).put("<old/>")
        _backdate(export_config.cache_path, 5000)
        export = _export(export_config, _Upstream(status=500))
        with pytest.raises(FetchError):
            export.get_sanitized_xml()
        assert FileCacheStore(export_config).get().text == "<old/>"


class TestGetSanitizedXmlSafe:
    def test_success_returns_xml(self, export_config, raw_export):
        text = _export(export_config, _Upstream(body=raw_export)).get_sanitized_xml_safe()
        assert text.startswith("<?xml")

    def test_non_200_becomes_error_string(self, export_config):
        text = _export(export_config, _Upstream(status=404)).get_sanitized_xml_safe()
        assert text.startswith(ERROR_PREFIX)
        assert "404" in text

    def test_empty_body_becomes_error_string(self, export_config):
        text = _export(export_config, _Upstream(body="   ")).get_sanitized_xml_safe()
        assert text.startswith("Error: ")

    def test_parse_failure_becomes_error_string(self, export_config):
        text = _export(export_config, _Upstream(body="<EDT><oops></EDT>")).get_sanitized_xml_safe()
        assert text.startswith("Error: ")
        assert not export_config.cache_path.exists()

    def test_cache_failure_becomes_error_string(self, export_config, raw_export, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        config = export_config.model_copy(update={"cache_dir": blocker})
        text = _export(config, _Upstream(body=raw_export)).get_sanitized_xml_safe()
        assert text.startswith("Error: ")

    def test_unexpected_exception_becomes_error_string(self, export_config):
        class _Exploding:
            def fetch(self):
                raise RuntimeError()

            def close(self):
                pass

        export = TimetableExport(export_config, fetcher=_Exploding())
        assert export.get_sanitized_xml_safe() == "Error: RuntimeError"


class TestGetTimetableXml:
    def test_config_error_becomes_error_string(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("EDTEXPORT_URL", "https://edt.test/no-placeholder")
        assert get_timetable_xml().startswith("Error: ")

    def test_uses_fresh_cache(self, export_config):
        FileCacheStore(export_config).put("<cached/>")
        assert get_timetable_xml(export_config) == "<cached/>"
