"""
确认令牌提取测试
"""
import pytest

from linkhop.core.errors import TokenNotFound
from linkhop.core.tokens import (
    STRATEGIES,
    extract_confirm_token,
    interstitial_file_name,
    match_confirm_token,
    require_confirm_token,
)

LITERAL_BODY = '<a id="uc-download-link" href="/uc?export=download&amp;confirm=AbC9_&amp;id=XYZ">Download anyway</a>'
ESCAPED_BODY = r'<script>var data = {"url":"\/uc?export\u003ddownload\u0026confirm\u003dQw_1\u0026id\u003dXYZ"};</script>'
DOWNLOAD_URL_BODY = (
    '<script>window.viewerData = {"downloadUrl":'
    '"https%3A%2F%2Fdrive.usercontent.google.com%2Fdownload%3Fid%3DXYZ%26confirm%3DDu-9"};</script>'
)
FORM_BODY = """
<html><head><title>Google Drive - Virus scan warning</title></head>
<body>
  <span class="uc-name-size"><a href="/open?id=XYZ">ubuntu.iso</a> (4.7G)</span>
  <form id="download-form" action="https://drive.usercontent.google.com/download" method="get">
    <input type="hidden" name="id" value="XYZ">
    <input type="hidden" name="export" value="download">
    <input type="hidden" name="confirm" value="t">
    <input type="hidden" name="uuid" value="0b7c-11">
  </form>
</body></html>
"""
WARNING_COOKIE = {"NID": "abc", "download_warning_13058876669334088843_XYZ": "ck_7"}


class TestStrategies:
    def test_literal(self):
        assert match_confirm_token(LITERAL_BODY).strategy == "literal"
        assert extract_confirm_token(LITERAL_BODY) == "AbC9_"

    def test_escaped(self):
        match = match_confirm_token(ESCAPED_BODY)
        assert match.strategy == "escaped"
        assert match.token == "Qw_1"

    def test_download_url_field(self):
        match = match_confirm_token(DOWNLOAD_URL_BODY)
        assert match.strategy == "download-url"
        assert match.token == "Du-9"

    def test_download_url_field_json_escaped(self):
        body = r'{"download_url":"https:\/\/drive.usercontent.google.com\/download?id=XYZ&export=download"}'
        # 没有 confirm 参数时不应该误报
        assert match_confirm_token(body) is None

    def test_warning_cookie(self):
        match = match_confirm_token("<html>no token here</html>", WARNING_COOKIE)
        assert match.strategy == "warning-cookie"
        assert match.token == "ck_7"

    def test_form_field(self):
        match = match_confirm_token(FORM_BODY)
        assert match.strategy == "form-field"
        assert match.token == "t"

    def test_no_token(self):
        assert extract_confirm_token("<html><body>Sign in to continue</body></html>", {"NID": "abc"}) is None
        assert extract_confirm_token(None) is None
        assert extract_confirm_token("") is None

    def test_first_match_wins(self):
        body = LITERAL_BODY + ESCAPED_BODY
        assert match_confirm_token(body, WARNING_COOKIE).token == "AbC9_"

    def test_body_beats_cookie(self):
        assert match_confirm_token(DOWNLOAD_URL_BODY, WARNING_COOKIE).token == "Du-9"

    def test_strategy_order(self):
        assert [name for name, _ in STRATEGIES] == [
            "literal", "escaped", "download-url", "warning-cookie", "form-field",
        ]


class TestRequire:
    def test_raises_token_not_found(self):
        with pytest.raises(TokenNotFound) as exc_info:
            require_confirm_token("https://drive.google.com/uc?id=X", "<html></html>", {})
        assert exc_info.value.url == "https://drive.google.com/uc?id=X"

    def test_returns_match(self):
        assert require_confirm_token("u", LITERAL_BODY).token == "AbC9_"


class TestInterstitialFileName:
    def test_name_element(self):
        assert interstitial_file_name(FORM_BODY) == "ubuntu.iso"

    def test_title_suffix_removed(self):
        assert interstitial_file_name("<html><title>report.pdf - Google Drive</title></html>") == "report.pdf"

    def test_generic_title_ignored(self):
        assert interstitial_file_name("<html><title>Google Drive - Virus scan warning</title></html>") is None

    def test_empty(self):
        assert interstitial_file_name(None) is None
        assert interstitial_file_name("<html><body></body></html>") is None
