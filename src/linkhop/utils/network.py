"""
网络请求工具模块
处理请求头构造、单跳请求、接口会话、响应解析等
"""
import ctypes
import gzip
import json
import locale
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit

import requests
from fake_useragent import UserAgent
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.errors import NetworkFailure
from ..core.models import Hop, ResolveOptions


# === 请求头配置 ===
def _detect_accept_language() -> str:
    """根据系统语言生成 Accept-Language

    只读取当前的 LC_CTYPE，不修改进程的 locale 设置。
    """
    if hasattr(ctypes, 'windll'):
        lcid = ctypes.windll.kernel32.GetUserDefaultLCID()
        system_language = locale.windows_locale.get(lcid, "en_US")
    else:
        try:
            locale_info = locale.getlocale()
        except (TypeError, ValueError):
            locale_info = None
        system_language = locale_info[0] if locale_info and locale_info[0] else "en_US"

    system_language = system_language.replace('_', '-')
    if system_language.lower() in ("c", "posix"):
        system_language = "en-US"
    return f"{system_language},en;q=0.9"


ACCEPT_LANGUAGE = _detect_accept_language()

user_agent_generator = UserAgent()
USER_AGENT = user_agent_generator.chrome

COMMON_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": ACCEPT_LANGUAGE,
    "Accept-Encoding": "gzip, deflate",
}

API_HEADERS = {
    "User-Agent": "Mozilla/5.0",
    "Accept": "application/json",
}


def build_headers(options: Optional[ResolveOptions] = None, settings: Optional[dict] = None) -> dict:
    """构造一次解析使用的基础请求头

    User-Agent 优先级：调用方参数 > 设置 > 自动生成
    """
    options = options or ResolveOptions()
    settings = settings or {}
    headers = COMMON_HEADERS.copy()

    user_agent = options.user_agent or settings.get("user_agent")
    if user_agent:
        headers["User-Agent"] = user_agent
    if settings.get("accept_language"):
        headers["Accept-Language"] = settings["accept_language"]
    if options.referer:
        headers["Referer"] = options.referer
    return headers


def get_timeout(settings: Optional[dict] = None) -> tuple:
    """把设置中的超时转换为 requests 使用的 (连接, 读取) 元组"""
    timeout = (settings or {}).get("timeout") or (10, 30)
    if isinstance(timeout, (int, float)):
        return (timeout, timeout)
    return tuple(timeout)


def referer_name(referer: Optional[str]) -> Optional[str]:
    """从来源地址的 name 查询参数中读取建议的文件名"""
    if not referer:
        return None
    values = parse_qs(urlsplit(referer).query).get("name", [])
    return values[0] if values and values[0] else None


# === 单跳请求 ===
def fetch_once(url: str, headers: dict, timeout=(10, 30), session=None) -> requests.Response:
    """发送一个不跟随重定向的 GET 请求

    默认使用 requests.get，每次调用都是独立的会话，不会在跳转之间自动保存 Cookie。
    响应以流模式打开，只有需要时才读取正文。

    Raises:
        NetworkFailure: 传输层错误（连接失败、超时等）
    """
    getter = session.get if session is not None else requests.get
    try:
        return getter(url, headers=headers, allow_redirects=False, timeout=timeout, stream=True)
    except requests.exceptions.RequestException as e:
        raise NetworkFailure(url, e) from e


def set_cookie_values(response) -> List[str]:
    """逐条读取 Set-Cookie 响应头

    requests 会把多个同名头用逗号合并，而 Expires 中也包含逗号，
    所以优先从 urllib3 的原始头中按条读取。
    """
    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return list(raw_headers.getlist("Set-Cookie"))
    value = response.headers.get("Set-Cookie")
    return [value] if value else []


def to_hop(url: str, response) -> Hop:
    """把响应转换为 Hop，只在内容为 HTML 时读取正文，然后关闭响应"""
    try:
        content_type = response.headers.get("Content-Type")
        hop = Hop(
            requested_url=url,
            status=response.status_code,
            location=response.headers.get("Location"),
            content_type=content_type,
            content_disposition=response.headers.get("Content-Disposition"),
        )
        if hop.is_html:
            try:
                body_text = response.text
            except requests.exceptions.RequestException as e:
                raise NetworkFailure(url, e) from e
            hop = Hop(
                requested_url=hop.requested_url,
                status=hop.status,
                location=hop.location,
                content_type=hop.content_type,
                content_disposition=hop.content_disposition,
                body_text=body_text,
            )
        return hop
    finally:
        response.close()


# === 接口会话 ===
def build_api_session(retries: int = 3) -> requests.Session:
    """创建一个带重试策略的会话，仅用于文件列表接口

    每次列表请求单独创建，用完即关闭。
    """
    session = requests.Session()

    # 配置重试策略
    retry_strategy = Retry(
        total=retries,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET", "OPTIONS"],
        backoff_factor=1
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def parse_json_response(response: requests.Response) -> Optional[dict]:
    """解析 HTTP 响应中的 JSON 内容，处理 gzip 压缩和编码"""
    try:
        content = response.content

        # 尝试 gzip 解压缩
        if content.startswith(b'\x1f\x8b'):
            try:
                content = gzip.decompress(content)
            except (OSError, EOFError) as e:
                print(f"⚠️ gzip 解压缩失败: {e}")

        # 尝试 UTF-8 解码
        if isinstance(content, bytes):
            decoded_content = content.decode("utf-8", errors="replace")
        else:
            decoded_content = content

        return json.loads(decoded_content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"⚠️ 无法解析 JSON 响应内容或解码失败: {e}")
        return None
