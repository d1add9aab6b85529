"""
分享链接识别模块
根据域名和路径/查询参数的形状判断链接所属服务，并提取资源 ID
"""
import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional
from urllib.parse import SplitResult, parse_qs, unquote, urlsplit

from .constants import Provider
from .errors import NotRecognized
from .models import ShareLink


# === URL 形状 ===
DRIVE_PATH_RE = re.compile(r"^/(?:file/)?(?:u/\d+/)?d/(?P<id>[^/?#]*)")
DRIVE_PARAM_PATH_RE = re.compile(r"^(?:/u/\d+)?/(?:uc|download)/?$")
DRIVE_OPEN_PATH_RE = re.compile(r"^/open/?$")
GOFILE_PATH_RE = re.compile(r"^/d/(?P<id>[^/?#]*)")

DRIVE_HOSTS = frozenset({"drive.google.com", "docs.google.com"})
DRIVE_USERCONTENT_HOSTS = frozenset({"drive.usercontent.google.com"})
GOFILE_HOSTS = frozenset({"gofile.io", "www.gofile.io"})


def _from_path(pattern: re.Pattern) -> Callable[[SplitResult], Optional[str]]:
    """从路径段中提取 ID，例如 /file/d/<id>/view"""
    def extract(parts: SplitResult) -> Optional[str]:
        match = pattern.match(parts.path)
        if not match:
            return None
        return unquote(match.group("id"))
    return extract


def _from_param(path_pattern: re.Pattern, name: str = "id") -> Callable[[SplitResult], Optional[str]]:
    """从查询参数中提取 ID，例如 /uc?id=<id>"""
    def extract(parts: SplitResult) -> Optional[str]:
        if not path_pattern.match(parts.path or "/"):
            return None
        for value in parse_qs(parts.query).get(name, []):
            if value:
                return value
        return None
    return extract


@dataclass(frozen=True)
class IdMatcher:
    """一条带标签的识别规则：服务类型 + 适用域名 + 提取方法"""
    provider: Provider
    hosts: FrozenSet[str]
    rule: str
    extract: Callable[[SplitResult], Optional[str]]

    def match(self, parts: SplitResult) -> Optional[str]:
        if (parts.hostname or "") not in self.hosts:
            return None
        return self.extract(parts) or None


# 每个服务内部按优先级排列：路径段 > id 参数 > open?id=
MATCHERS = (
    IdMatcher(Provider.DRIVE_FILE, DRIVE_HOSTS, "path-segment", _from_path(DRIVE_PATH_RE)),
    IdMatcher(Provider.DRIVE_FILE, DRIVE_HOSTS, "id-param", _from_param(DRIVE_PARAM_PATH_RE)),
    IdMatcher(Provider.DRIVE_FILE, DRIVE_HOSTS, "open-path", _from_param(DRIVE_OPEN_PATH_RE)),
    IdMatcher(Provider.DRIVE_USERCONTENT, DRIVE_USERCONTENT_HOSTS, "path-segment", _from_path(DRIVE_PATH_RE)),
    IdMatcher(Provider.DRIVE_USERCONTENT, DRIVE_USERCONTENT_HOSTS, "id-param", _from_param(DRIVE_PARAM_PATH_RE)),
    IdMatcher(Provider.GOFILE, GOFILE_HOSTS, "path-segment", _from_path(GOFILE_PATH_RE)),
)


def classify(url: str) -> ShareLink:
    """识别分享链接，不匹配时返回 UNRECOGNIZED 而不是抛出异常"""
    raw_url = (url or "").strip()
    try:
        parts = urlsplit(raw_url)
    except ValueError:
        return ShareLink(raw_url, Provider.UNRECOGNIZED)

    if parts.scheme.lower() not in ("http", "https"):
        return ShareLink(raw_url, Provider.UNRECOGNIZED)

    for matcher in MATCHERS:
        resource_id = matcher.match(parts)
        if resource_id:
            return ShareLink(raw_url, matcher.provider, resource_id)
    return ShareLink(raw_url, Provider.UNRECOGNIZED)


def extract_share_link(url: str) -> ShareLink:
    """识别分享链接并提取资源 ID

    Args:
        url: 原始分享链接

    Returns:
        ShareLink 对象

    Raises:
        NotRecognized: 没有任何规则匹配，或提取到的 ID 为空
    """
    link = classify(url)
    if not link.recognized:
        raise NotRecognized(url)
    return link
