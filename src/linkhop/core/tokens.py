"""
确认令牌提取模块
从中间页正文和 Cookie 中查找绕过风险提示所需的 confirm 令牌
"""
import html
import json
import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import parse_qs, unquote, urlsplit

from bs4 import BeautifulSoup

from .constants import WARNING_COOKIE_PREFIX
from .errors import TokenNotFound

TOKEN_CHARS = r"[0-9A-Za-z_\-]+"
CONFIRM_RE = re.compile(rf"confirm=({TOKEN_CHARS})")
ESCAPED_CONFIRM_RE = re.compile(rf"confirm\\(?:u003[dD]|x3[dD])({TOKEN_CHARS})")
DOWNLOAD_URL_FIELD_RE = re.compile(r'"download_?[uU]rl"\s*:\s*"((?:[^"\\]|\\.)+)"')


@dataclass(frozen=True)
class TokenMatch:
    strategy: str
    token: str


def _decode_field(value: str) -> str:
    """还原被 JSON / HTML / 百分号转义过的地址"""
    try:
        value = json.loads(f'"{value}"')
    except json.JSONDecodeError:
        pass
    value = html.unescape(value)
    for _ in range(2):
        unquoted = unquote(value)
        if unquoted == value:
            break
        value = unquoted
    return value


def _from_literal(body: str, jar_entries: Mapping[str, str]) -> Optional[str]:
    match = CONFIRM_RE.search(body)
    return match.group(1) if match else None


def _from_escaped(body: str, jar_entries: Mapping[str, str]) -> Optional[str]:
    match = ESCAPED_CONFIRM_RE.search(body)
    return match.group(1) if match else None


def _from_download_url(body: str, jar_entries: Mapping[str, str]) -> Optional[str]:
    for match in DOWNLOAD_URL_FIELD_RE.finditer(body):
        decoded = _decode_field(match.group(1))
        for value in parse_qs(urlsplit(decoded).query).get("confirm", []):
            if value:
                return value
        literal = CONFIRM_RE.search(decoded)
        if literal:
            return literal.group(1)
    return None


def _from_warning_cookie(body: str, jar_entries: Mapping[str, str]) -> Optional[str]:
    for name, value in jar_entries.items():
        if name.startswith(WARNING_COOKIE_PREFIX) and value:
            return value
    return None


def _from_form_field(body: str, jar_entries: Mapping[str, str]) -> Optional[str]:
    if "confirm" not in body:
        return None
    soup = BeautifulSoup(body, "html.parser")
    field = soup.find("input", attrs={"name": "confirm"})
    if field and field.get("value"):
        return field["value"]
    return None


# 按顺序尝试，第一个命中的策略生效
STRATEGIES = (
    ("literal", _from_literal),
    ("escaped", _from_escaped),
    ("download-url", _from_download_url),
    ("warning-cookie", _from_warning_cookie),
    ("form-field", _from_form_field),
)


def match_confirm_token(body_text: Optional[str], jar_entries: Optional[Mapping[str, str]] = None) -> Optional[TokenMatch]:
    """依次尝试所有策略，返回命中的策略名和令牌"""
    body = body_text or ""
    entries = jar_entries or {}
    for name, strategy in STRATEGIES:
        token = strategy(body, entries)
        if token:
            return TokenMatch(name, token)
    return None


def extract_confirm_token(body_text: Optional[str], jar_entries: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """返回 confirm 令牌，找不到时返回 None（不是错误）"""
    match = match_confirm_token(body_text, jar_entries)
    return match.token if match else None


def require_confirm_token(url: str, body_text: Optional[str], jar_entries: Optional[Mapping[str, str]] = None) -> TokenMatch:
    match = match_confirm_token(body_text, jar_entries)
    if match is None:
        raise TokenNotFound(url)
    return match


def interstitial_file_name(body_text: Optional[str]) -> Optional[str]:
    """从风险提示页中读取文件名"""
    if not body_text:
        return None
    soup = BeautifulSoup(body_text, "html.parser")

    name_link = soup.select_one(".uc-name-size a")
    if name_link and name_link.get_text(strip=True):
        return name_link.get_text(strip=True)

    title = soup.title.get_text(strip=True) if soup.title else ""
    # 通用标题（如 "Google Drive - Virus scan warning"）不是文件名
    if not title or title.startswith("Google Drive"):
        return None
    if title.endswith(" - Google Drive"):
        title = title[: -len(" - Google Drive")].strip()
    return title or None
