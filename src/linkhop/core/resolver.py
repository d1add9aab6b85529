"""
解析编排模块
把链接识别、重定向遍历和令牌提取组合成一个小状态机：

    START -> PRIMARY_FETCH -> DIRECT_HIT | INTERSTITIAL | OTHER_NONDIRECT

每次解析使用独立的 Cookie 容器和跳数计数，解析结束即丢弃。
"""
from typing import Optional, Union
from urllib.parse import quote, urlsplit

from ..utils.formatters import filename_from_disposition, format_name_from_template, sanitize_name
from ..utils.network import build_headers, get_timeout, referer_name
from .constants import (
    DEFAULT_SETTINGS, DIRECT_CONTENT_HOST_RE, DRIVE_FRONT_BASE, DRIVE_USERCONTENT_BASE,
    Provider, ResolutionState,
)
from .errors import NetworkFailure, NotRecognized, ResolveError, TokenNotFound, UnexpectedStatus
from .extractor import extract_share_link
from .jar import CookieJar
from .models import Hop, ResolutionOutcome, ResolveOptions, ShareLink, WalkResult
from .tokens import interstitial_file_name, require_confirm_token
from .walker import walk

DRIVE_PROVIDERS = (Provider.DRIVE_FILE, Provider.DRIVE_USERCONTENT)


def candidate_url(base: str, resource_id: str, token: Optional[str] = None) -> str:
    """构造下载候选地址，token 存在时追加 confirm 参数"""
    path = "/download" if base == DRIVE_USERCONTENT_BASE else "/uc"
    url = f"{base}{path}?id={quote(resource_id, safe='')}&export=download"
    if token:
        url += f"&confirm={quote(token, safe='')}"
    return url


def is_direct_host(url: str) -> bool:
    return bool(DIRECT_CONTENT_HOST_RE.match(urlsplit(url).hostname or ""))


def _is_direct_hit(result: WalkResult) -> bool:
    hop = result.hop
    if hop.is_html or hop.status >= 400:
        return False
    if is_direct_host(result.url):
        return True
    # 前端域名直接返回附件时同样视为直链
    return hop.is_success and hop.is_attachment


def _snippet(body_text: Optional[str]) -> str:
    return " ".join((body_text or "").split())[:200]


class _Attempt:
    """一次解析尝试，持有本次调用范围内的全部可变状态"""

    def __init__(self, link: ShareLink, options: ResolveOptions, settings: dict, session=None):
        self.link = link
        self.options = options
        self.session = session
        self.max_hops = settings.get("max_hops", DEFAULT_SETTINGS["max_hops"])
        self.timeout = get_timeout(settings)
        self.name_template = settings.get("fallback_name_template", DEFAULT_SETTINGS["fallback_name_template"])

        self.jar = CookieJar().merge_cookie_header(options.cookie)
        self.headers = build_headers(options, settings)
        self.state = ResolutionState.START
        self.attempts = []
        self.file_name = None

        if link.provider is Provider.DRIVE_USERCONTENT:
            self.primary_base, self.alternate_base = DRIVE_USERCONTENT_BASE, DRIVE_FRONT_BASE
        else:
            self.primary_base, self.alternate_base = DRIVE_FRONT_BASE, DRIVE_USERCONTENT_BASE

    def run(self) -> ResolutionOutcome:
        primary = candidate_url(self.primary_base, self.link.resource_id)
        self.state = ResolutionState.PRIMARY_FETCH
        try:
            result = self._walk(primary)
        except NetworkFailure as e:
            # 还没有任何一跳成功时直接失败
            if e.hops_completed == 0:
                raise
            return self._fallback(e)

        hop = result.hop
        if _is_direct_hit(result):
            self.state = ResolutionState.DIRECT_HIT
            return self._outcome(result.url, resolved=True)

        if hop.is_html:
            self.state = ResolutionState.INTERSTITIAL
            return self._bypass_interstitial(result)

        self.state = ResolutionState.OTHER_NONDIRECT
        error = UnexpectedStatus(result.url, hop.status) if hop.status >= 400 else None
        return self._fallback(error)

    def _bypass_interstitial(self, result: WalkResult) -> ResolutionOutcome:
        hop = result.hop
        try:
            match = require_confirm_token(result.url, hop.body_text, self.jar.entries())
        except TokenNotFound as e:
            error = UnexpectedStatus(result.url, hop.status, _snippet(hop.body_text)) if hop.status >= 400 else e
            return self._fallback(error)

        last = result
        for base in (self.primary_base, self.alternate_base):
            candidate = candidate_url(base, self.link.resource_id, match.token)
            try:
                last = self._walk(candidate)
            except NetworkFailure as e:
                return self._fallback(e)
            if _is_direct_hit(last):
                return self._outcome(candidate, resolved=True)

        return self._fallback(UnexpectedStatus(last.url, last.hop.status, f"confirm 令牌 ({match.strategy}) 未能绕过中间页"))

    def _walk(self, url: str) -> WalkResult:
        self.attempts.append(url)
        result = walk(url, self.headers, self.jar, max_hops=self.max_hops,
                      session=self.session, timeout=self.timeout)
        self._note_name(result.hop)
        return result

    def _note_name(self, hop: Hop):
        if self.file_name:
            return
        self.file_name = filename_from_disposition(hop.content_disposition)
        if not self.file_name and hop.is_html and hop.is_success:
            self.file_name = interstitial_file_name(hop.body_text)

    def _display_name(self) -> str:
        name = referer_name(self.options.referer) or self.file_name
        if name:
            return sanitize_name(name)
        return format_name_from_template(self.name_template, {
            "provider": self.link.provider.name.lower(),
            "resource_id": self.link.resource_id,
        })

    def _outcome(self, final_url: str, resolved: bool, error: Optional[ResolveError] = None) -> ResolutionOutcome:
        headers = {"User-Agent": self.headers["User-Agent"]}
        if self.jar:
            headers["Cookie"] = self.jar.serialize()
        if self.options.referer:
            headers["Referer"] = self.options.referer
        return ResolutionOutcome(
            final_url=final_url,
            headers=headers,
            display_name=self._display_name(),
            resolved=resolved,
            state=self.state,
            attempts=tuple(self.attempts),
            error=error,
        )

    def _fallback(self, error: Optional[ResolveError]) -> ResolutionOutcome:
        """返回不带令牌的标准候选地址，该地址很可能仍被中间页拦截"""
        fallback = candidate_url(self.primary_base, self.link.resource_id)
        reason = error if error else f"未到达直链域名 ({self.state.name})"
        print(f"⚠️ 无法完全解析 {self.link.raw_url}，使用候选地址: {reason}")
        return self._outcome(fallback, resolved=False, error=error)


class DriveResolver:
    """Google Drive 分享链接解析器

    Args:
        settings: 设置字典，默认使用 DEFAULT_SETTINGS
        session: 可选，提供 get() 方法的对象，默认每次请求使用 requests.get
    """

    providers = DRIVE_PROVIDERS

    def __init__(self, settings: Optional[dict] = None, session=None):
        self.settings = settings or dict(DEFAULT_SETTINGS)
        self.session = session

    def resolve(self, link: Union[str, ShareLink], options: Optional[ResolveOptions] = None) -> ResolutionOutcome:
        """解析一个分享链接

        Raises:
            NotRecognized: 链接不是 Google Drive 分享链接（在任何网络请求之前）
            NetworkFailure: 第一跳就传输失败
        """
        if not isinstance(link, ShareLink):
            link = extract_share_link(link)
        if link.provider not in self.providers or not link.resource_id:
            raise NotRecognized(link.raw_url)
        return _Attempt(link, options or ResolveOptions(), self.settings, self.session).run()


def resolve_drive_link(url: str, options: Optional[ResolveOptions] = None,
                       session=None, settings: Optional[dict] = None) -> ResolutionOutcome:
    """便捷函数：用一次性的 DriveResolver 解析链接"""
    return DriveResolver(settings=settings, session=session).resolve(url, options)
