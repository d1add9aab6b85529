"""
测试用的假会话和假响应，替代真实网络请求
"""
from types import SimpleNamespace

from requests.structures import CaseInsensitiveDict


class FakeRawHeaders:
    """模拟 urllib3 原始响应头，支持逐条读取 Set-Cookie"""

    def __init__(self, set_cookies=()):
        self._set_cookies = list(set_cookies)

    def getlist(self, name):
        if name.lower() == "set-cookie":
            return list(self._set_cookies)
        return []


class FakeResponse:
    def __init__(self, status_code=200, headers=None, text="", content=None, set_cookies=()):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self._text = text
        self.content = content if content is not None else text.encode("utf-8")
        self.raw = SimpleNamespace(headers=FakeRawHeaders(set_cookies))
        self.closed = False

    @property
    def text(self):
        return self._text

    def close(self):
        self.closed = True


class FakeSession:
    """按 URL 返回预设响应并记录每次请求

    routes 的值可以是响应、响应列表（按顺序依次返回）、异常或 callable(url, headers)。
    """

    def __init__(self, routes=None, default=None):
        self.routes = {url: list(value) if isinstance(value, list) else value
                       for url, value in (routes or {}).items()}
        self.default = default
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, **kwargs):
        self.calls.append(SimpleNamespace(url=url, headers=dict(headers or {}), kwargs=kwargs))
        handler = self.routes.get(url, self.default)
        if isinstance(handler, list):
            handler = handler.pop(0)
        if handler is None:
            raise AssertionError(f"unexpected request: {url}")
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(url, headers)
        return handler

    def close(self):
        self.closed = True

    @property
    def urls(self):
        return [call.url for call in self.calls]


def redirect(location, status=302, set_cookies=()):
    return FakeResponse(status, {"Location": location}, set_cookies=set_cookies)


def html_page(body, status=200, set_cookies=()):
    return FakeResponse(status, {"Content-Type": "text/html; charset=utf-8"}, text=body, set_cookies=set_cookies)


def file_body(disposition=None, content_type="application/octet-stream", status=200, set_cookies=()):
    headers = {"Content-Type": content_type}
    if disposition:
        headers["Content-Disposition"] = disposition
    return FakeResponse(status, headers, content=b"", set_cookies=set_cookies)


def json_body(payload_text, status=200):
    return FakeResponse(status, {"Content-Type": "application/json"}, text=payload_text)
