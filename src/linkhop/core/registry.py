"""
解析器注册模块
按服务类型把分享链接分发给对应的解析器，输出交给下载引擎的解析描述
"""
import os
from typing import Callable, Dict, Optional
from urllib.parse import unquote, urlsplit

from ..utils.formatters import sanitize_name
from ..utils.network import API_HEADERS, referer_name
from .api import get_content
from .constants import DEFAULT_SETTINGS, Provider
from .detector import detect_files_from_content
from .errors import NotRecognized
from .extractor import extract_share_link
from .models import DownloadEntry, ResolutionDescriptor, ResolveOptions, ShareLink
from .resolver import DriveResolver

ResolverFunc = Callable[[ShareLink, ResolveOptions, object, dict], ResolutionDescriptor]

# 服务类型 -> 解析函数，只在导入时注册
_RESOLVERS: Dict[Provider, ResolverFunc] = {}


def register(*providers: Provider):
    """注册解析函数的装饰器"""
    def decorator(func: ResolverFunc) -> ResolverFunc:
        for provider in providers:
            _RESOLVERS[provider] = func
        return func
    return decorator


def registered_providers():
    return tuple(_RESOLVERS)


def _forwarded_headers(options: ResolveOptions, default_user_agent: str) -> dict:
    headers = {"User-Agent": options.user_agent or default_user_agent}
    if options.cookie:
        headers["Cookie"] = options.cookie
    if options.referer:
        headers["Referer"] = options.referer
    return headers


@register(Provider.DRIVE_FILE, Provider.DRIVE_USERCONTENT)
def resolve_drive(link: ShareLink, options: ResolveOptions, session, settings: dict) -> ResolutionDescriptor:
    outcome = DriveResolver(settings=settings, session=session).resolve(link, options)
    entry = DownloadEntry(name=outcome.display_name, url=outcome.final_url, headers=outcome.headers)
    return ResolutionDescriptor(name=outcome.display_name, files=[entry], resolved=outcome.resolved)


@register(Provider.GOFILE)
def resolve_gofile(link: ShareLink, options: ResolveOptions, session, settings: dict) -> ResolutionDescriptor:
    data = get_content(link.resource_id, settings=settings, session=session)
    headers = _forwarded_headers(options, API_HEADERS["User-Agent"])
    files, skipped = detect_files_from_content(data, link.raw_url, headers)

    for item in skipped:
        print(f"⚠️ 跳过 {item.name}: {item.reason}")

    # 单个文件时使用文件名作为任务名
    name = referer_name(options.referer)
    if not name:
        name = files[0].name if len(files) == 1 else f"gofile_{link.resource_id}"
    return ResolutionDescriptor(name=sanitize_name(name), files=files, skipped=skipped)


def resolve(url: str, options: Optional[ResolveOptions] = None, session=None,
            settings: Optional[dict] = None) -> ResolutionDescriptor:
    """识别分享链接并交给对应的解析器

    Raises:
        NotRecognized: 链接不属于任何已注册的服务
    """
    link = extract_share_link(url)
    handler = _RESOLVERS.get(link.provider)
    if handler is None:
        raise NotRecognized(url)
    return handler(link, options or ResolveOptions(), session, settings or dict(DEFAULT_SETTINGS))


def resolve_or_passthrough(url: str, options: Optional[ResolveOptions] = None, session=None,
                           settings: Optional[dict] = None) -> ResolutionDescriptor:
    """无法识别的链接按普通直链原样返回"""
    options = options or ResolveOptions()
    try:
        return resolve(url, options, session=session, settings=settings)
    except NotRecognized:
        name = referer_name(options.referer) or os.path.basename(unquote(urlsplit(url).path)) or "download"
        entry = DownloadEntry(name=sanitize_name(name), url=url,
                              headers=_forwarded_headers(options, API_HEADERS["User-Agent"]))
        return ResolutionDescriptor(name=entry.name, files=[entry], resolved=False)
