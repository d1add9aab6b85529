"""
LinkHop - 把网盘分享链接解析为可直接下载的请求
"""
from .core import (
    resolve,
    resolve_or_passthrough,
    resolve_drive_link,
    DriveResolver,
    ResolveOptions,
    ResolutionDescriptor,
    ResolutionOutcome,
    ResolveError,
    NotRecognized,
    NetworkFailure,
    UnexpectedStatus,
    TokenNotFound,
    ListingError,
)

__version__ = "1.0.0"

__all__ = [
    'resolve',
    'resolve_or_passthrough',
    'resolve_drive_link',
    'DriveResolver',
    'ResolveOptions',
    'ResolutionDescriptor',
    'ResolutionOutcome',
    'ResolveError',
    'NotRecognized',
    'NetworkFailure',
    'UnexpectedStatus',
    'TokenNotFound',
    'ListingError',
]
