"""
重定向遍历模块
手动跟随 Location，逐跳更新 Cookie 容器。
自动跟随重定向会丢掉服务商的中间页，所以每一跳都禁用重定向。
"""
from urllib.parse import urljoin

from ..utils.network import fetch_once, set_cookie_values, to_hop
from .errors import NetworkFailure
from .jar import CookieJar
from .models import WalkResult

DEFAULT_MAX_HOPS = 10


def walk(start_url: str, base_headers: dict, jar: CookieJar, max_hops: int = DEFAULT_MAX_HOPS,
         session=None, timeout=(10, 30)) -> WalkResult:
    """从 start_url 开始最多请求 max_hops 次

    Args:
        start_url: 起始地址
        base_headers: 每一跳都会带上的请求头（Cookie 除外）
        jar: Cookie 容器，会被原地修改
        max_hops: 最大请求次数，超过后返回最后一跳而不是报错
        session: 可选，提供 get() 方法的对象，默认使用 requests.get
        timeout: 单次请求超时

    Returns:
        WalkResult，包含最后一跳、其请求地址和请求次数

    Raises:
        NetworkFailure: 任意一跳传输失败
    """
    if max_hops < 1:
        raise ValueError(f"max_hops 必须大于 0: {max_hops}")

    url = start_url
    hop = None
    fetches = 0
    while fetches < max_hops:
        headers = dict(base_headers)
        if jar:
            headers["Cookie"] = jar.serialize()

        try:
            response = fetch_once(url, headers, timeout=timeout, session=session)
            jar.merge(set_cookie_values(response))
            hop = to_hop(url, response)
        except NetworkFailure as e:
            e.hops_completed = fetches
            raise
        fetches += 1

        if not hop.is_redirect:
            return WalkResult(hop=hop, url=url, fetches=fetches)

        # 最后一次请求仍是重定向时不再跟随，交给调用方判断
        if fetches < max_hops:
            url = urljoin(url, hop.location)

    return WalkResult(hop=hop, url=hop.requested_url, fetches=fetches, exhausted=True)
