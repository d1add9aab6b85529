"""
API请求模块
处理与 GoFile 内容接口的交互
"""
from typing import Optional
from urllib.parse import quote

import requests

from ..utils.network import API_HEADERS, build_api_session, get_timeout, parse_json_response
from .constants import DEFAULT_SETTINGS
from .errors import ListingError, NetworkFailure, UnexpectedStatus


def get_content(content_id: str, settings: Optional[dict] = None, session=None) -> dict:
    """获取 GoFile 分享内容

    Args:
        content_id: 分享链接中的内容 ID
        settings: 设置字典（api_base、api_retries、timeout）
        session: 可选，提供 get() 方法的对象；为空时创建带重试的临时会话

    Returns:
        接口返回的 data 字典

    Raises:
        NetworkFailure: 请求失败
        UnexpectedStatus: 接口返回非 2xx 状态
        ListingError: 返回内容不是 {"status": "ok", "data": {...}}
    """
    settings = settings or DEFAULT_SETTINGS
    api_base = settings.get("api_base", DEFAULT_SETTINGS["api_base"]).rstrip("/")
    api_url = f"{api_base}/getContent?contentId={quote(content_id, safe='')}"

    own_session = session is None
    if own_session:
        session = build_api_session(settings.get("api_retries", DEFAULT_SETTINGS["api_retries"]))

    try:
        response = session.get(api_url, headers=API_HEADERS.copy(), timeout=get_timeout(settings))
    except requests.exceptions.RequestException as e:
        raise NetworkFailure(api_url, e) from e
    finally:
        if own_session:
            session.close()

    if not 200 <= response.status_code < 300:
        raise UnexpectedStatus(api_url, response.status_code, (response.text or "")[:200])

    payload = parse_json_response(response)
    if not isinstance(payload, dict) or payload.get("status") != "ok" or not payload.get("data"):
        raise ListingError(api_url, "GoFile 接口返回了意外的数据")

    return payload["data"]
