"""
数据模型
描述一次解析过程中产生的链接、单跳响应和最终结果
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import Provider, ResolutionState
from .errors import ResolveError


@dataclass(frozen=True)
class ShareLink:
    """识别后的分享链接，创建后不可变"""
    raw_url: str
    provider: Provider
    resource_id: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.provider is not Provider.UNRECOGNIZED and bool(self.resource_id)


@dataclass(frozen=True)
class Hop:
    """一次不跟随重定向的 GET 请求结果

    body_text 只在响应为 HTML 时读取，文件内容本身永远不会被下载。
    """
    requested_url: str
    status: int
    location: Optional[str] = None
    content_type: Optional[str] = None
    content_disposition: Optional[str] = None
    body_text: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400 and bool(self.location)

    @property
    def is_html(self) -> bool:
        return bool(self.content_type) and "html" in self.content_type.lower()

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_attachment(self) -> bool:
        return bool(self.content_disposition) and "attachment" in self.content_disposition.lower()


@dataclass(frozen=True)
class WalkResult:
    """重定向遍历的结果：最后一跳、其请求地址和实际请求次数"""
    hop: Hop
    url: str
    fetches: int
    exhausted: bool = False


@dataclass(frozen=True)
class ResolveOptions:
    """调用方提供的可选参数"""
    user_agent: Optional[str] = None
    cookie: Optional[str] = None
    referer: Optional[str] = None


@dataclass(frozen=True)
class ResolutionOutcome:
    """单个分享链接的解析结果

    resolved 为 False 时 final_url 是尽力而为的候选地址，很可能仍然被中间页拦截，
    error 记录了导致降级的原因。
    """
    final_url: str
    headers: Dict[str, str]
    display_name: str
    resolved: bool
    state: ResolutionState
    attempts: Tuple[str, ...] = ()
    error: Optional[ResolveError] = None


@dataclass(frozen=True)
class DownloadEntry:
    """交给下载引擎的单个文件请求"""
    name: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        req = {"url": self.url}
        if self.headers:
            req["headers"] = dict(self.headers)
        return {"name": self.name, "req": req}


@dataclass(frozen=True)
class SkippedItem:
    """列表中无法提供下载地址而被跳过的条目"""
    name: str
    reason: str


@dataclass
class ResolutionDescriptor:
    """解析描述，下载引擎把它当作不透明的任务描述使用"""
    name: str
    files: List[DownloadEntry]
    resolved: bool = True
    skipped: List[SkippedItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "files": [entry.to_dict() for entry in self.files],
        }
