"""
Cookie 容器
只记录名称和值，每个名称最多一个值（后写入的覆盖先写入的）。
不记录过期时间、域名和路径，只在一次解析过程中有效。
"""
from typing import Dict, Iterable, Mapping, Optional, Tuple


def parse_set_cookie(raw_value: str) -> Optional[Tuple[str, str]]:
    """把一条 Set-Cookie 值解析为 (名称, 值)，格式错误时返回 None"""
    if not raw_value:
        return None
    pair = raw_value.split(";", 1)[0]
    if "=" not in pair:
        return None
    name, value = pair.split("=", 1)
    name = name.strip()
    if not name:
        return None
    return name, value.strip()


def merge(existing: Mapping[str, str], raw_set_cookies: Iterable[str]) -> Dict[str, str]:
    """合并 Set-Cookie 值，返回新的字典，不修改 existing"""
    entries = dict(existing)
    for raw_value in raw_set_cookies:
        parsed = parse_set_cookie(raw_value)
        if parsed:
            name, value = parsed
            entries[name] = value
    return entries


class CookieJar:
    """一次解析过程内使用的 Cookie 容器"""

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries: Dict[str, str] = dict(entries or {})

    def merge(self, raw_set_cookies: Iterable[str]) -> "CookieJar":
        self._entries = merge(self._entries, raw_set_cookies)
        return self

    def merge_cookie_header(self, cookie_header: Optional[str]) -> "CookieJar":
        """合并调用方提供的 Cookie 字符串，例如 "a=1; b=2" """
        if cookie_header:
            self.merge(part for part in cookie_header.split(";"))
        return self

    def serialize(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self._entries.items())

    def entries(self) -> Dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CookieJar({sorted(self._entries)})"
