"""
解析过程中的异常定义
"""
from typing import Optional


class ResolveError(Exception):
    """所有解析错误的基类"""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class NotRecognized(ResolveError):
    """URL 不属于任何已知的分享链接格式，调用方应将其视为普通直链"""

    def __init__(self, url: str):
        super().__init__(url, f"无法识别的分享链接: {url}")


class NetworkFailure(ResolveError):
    """单跳请求在传输层失败（连接错误、超时等）"""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        detail = f"{cause.__class__.__name__}: {cause}" if cause else "未知错误"
        super().__init__(url, f"网络请求失败 {url} ({detail})")
        self.cause = cause
        # 失败前已经成功完成的跳数，由重定向遍历填写
        self.hops_completed = 0


class UnexpectedStatus(ResolveError):
    """终止响应的状态码异常，且没有可识别的中间页"""

    def __init__(self, url: str, status: int, snippet: str = ""):
        message = f"意外的 HTTP 状态 {status}: {url}"
        if snippet:
            message = f"{message} - {snippet}"
        super().__init__(url, message)
        self.status = status
        self.snippet = snippet


class TokenNotFound(ResolveError):
    """中间页存在，但没有找到确认令牌（可能需要登录或无权限）"""

    def __init__(self, url: str):
        super().__init__(url, f"中间页中未找到确认令牌: {url}")


class ListingError(ResolveError):
    """文件列表接口返回的数据无法使用"""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"{reason}: {url}")
        self.reason = reason
