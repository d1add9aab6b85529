"""
GoFile 列表接口与文件检测测试
"""
import json
from unittest.mock import patch

import pytest
import requests

from linkhop.core.api import get_content
from linkhop.core.detector import detect_files_from_content, pick_best_name
from linkhop.core.errors import ListingError, NetworkFailure, UnexpectedStatus

from fakes import FakeSession, json_body

API_URL = "https://api.gofile.io/getContent?contentId=9WQCql"
SOURCE = "https://gofile.io/d/9WQCql"


def ok_payload(data):
    return json_body(json.dumps({"status": "ok", "data": data}))


class TestGetContent:
    def test_returns_data(self, settings):
        session = FakeSession({API_URL: ok_payload({"contents": {"x": {"type": "file"}}})})
        data = get_content("9WQCql", settings, session=session)

        assert data == {"contents": {"x": {"type": "file"}}}
        call = session.calls[0]
        assert call.headers["Accept"] == "application/json"
        assert call.kwargs["timeout"] == (10, 30)

    def test_custom_api_base(self, settings):
        settings["api_base"] = "https://mirror.example/"
        session = FakeSession({"https://mirror.example/getContent?contentId=abc": ok_payload({"files": [1]})})
        assert get_content("abc", settings, session=session) == {"files": [1]}

    def test_http_error(self, settings):
        session = FakeSession({API_URL: json_body("rate limited " * 40, status=429)})
        with pytest.raises(UnexpectedStatus) as exc_info:
            get_content("9WQCql", settings, session=session)
        assert exc_info.value.status == 429
        assert len(exc_info.value.snippet) == 200

    @pytest.mark.parametrize("body", [
        '{"status": "error-notFound", "data": {}}',
        '{"status": "ok"}',
        '["not", "a", "dict"]',
        "<html>not json</html>",
    ])
    def test_unexpected_payload(self, settings, body):
        session = FakeSession({API_URL: json_body(body)})
        with pytest.raises(ListingError):
            get_content("9WQCql", settings, session=session)

    def test_network_failure(self, settings):
        session = FakeSession({API_URL: requests.exceptions.ConnectionError("down")})
        with pytest.raises(NetworkFailure):
            get_content("9WQCql", settings, session=session)

    def test_temporary_session_is_closed(self, settings):
        session = FakeSession({API_URL: ok_payload({"contents": []})})
        with patch("linkhop.core.api.build_api_session", return_value=session) as factory:
            get_content("9WQCql", settings)
        factory.assert_called_once_with(settings["api_retries"])
        assert session.closed


class TestDetectFiles:
    def test_dict_contents(self):
        data = {"contents": {
            "f1": {"type": "file", "name": "a.mp4", "link": "https://store.gofile.io/download/f1/a.mp4"},
            "d1": {"type": "folder", "name": "sub"},
        }}
        files, skipped = detect_files_from_content(data, SOURCE, {"User-Agent": "UA"})

        assert [(f.name, f.url) for f in files] == [("a.mp4", "https://store.gofile.io/download/f1/a.mp4")]
        assert files[0].headers == {"User-Agent": "UA"}
        assert skipped == []

    def test_list_contents_and_link_priority(self):
        data = {"children": [
            {"type": "FILE", "filename": "b.zip", "link": "https://page", "directLink": "https://direct/b.zip"},
            {"name": "c.txt", "url": "https://direct/c.txt"},
        ]}
        files, _ = detect_files_from_content(data, SOURCE)
        assert [(f.name, f.url) for f in files] == [
            ("b.zip", "https://direct/b.zip"),
            ("c.txt", "https://direct/c.txt"),
        ]

    def test_nested_folder(self):
        data = {"contents": {
            "d1": {"type": "folder", "children": {
                "f2": {"type": "file", "name": "inner.bin", "link": "https://direct/inner.bin"},
            }},
        }}
        files, _ = detect_files_from_content(data, SOURCE)
        assert [f.name for f in files] == ["inner.bin"]

    def test_items_without_url_are_skipped(self):
        data = {"files": [
            {"type": "file", "name": "ok.bin", "link": "https://direct/ok.bin"},
            {"type": "file", "name": "locked.bin"},
        ]}
        files, skipped = detect_files_from_content(data, SOURCE)
        assert [f.name for f in files] == ["ok.bin"]
        assert [s.name for s in skipped] == ["locked.bin"]

    def test_duplicate_urls(self):
        data = {"files": [
            {"type": "file", "name": "a", "link": "https://direct/a"},
            {"type": "file", "name": "a copy", "link": "https://direct/a"},
        ]}
        files, _ = detect_files_from_content(data, SOURCE)
        assert len(files) == 1

    @pytest.mark.parametrize("data", [
        {},
        {"contents": {}},
        {"contents": {"d": {"type": "folder", "name": "empty"}}},
        {"contents": [{"type": "file", "name": "no-link"}]},
    ])
    def test_nothing_downloadable(self, data):
        with pytest.raises(ListingError) as exc_info:
            detect_files_from_content(data, SOURCE)
        assert exc_info.value.url == SOURCE

    def test_pick_best_name(self):
        assert pick_best_name({"name": "n", "filename": "f"}) == "n"
        assert pick_best_name({"filename": "f"}) == "f"
        assert pick_best_name({}) == "downloaded_file"
