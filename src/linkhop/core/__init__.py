"""
核心业务逻辑模块
"""
from .constants import Provider, ResolutionState, DEFAULT_SETTINGS
from .errors import (
    ResolveError,
    NotRecognized,
    NetworkFailure,
    UnexpectedStatus,
    TokenNotFound,
    ListingError,
)
from .models import (
    ShareLink,
    Hop,
    WalkResult,
    ResolveOptions,
    ResolutionOutcome,
    DownloadEntry,
    SkippedItem,
    ResolutionDescriptor,
)
from .extractor import classify, extract_share_link
from .jar import CookieJar
from .walker import walk, DEFAULT_MAX_HOPS
from .tokens import extract_confirm_token, match_confirm_token
from .resolver import DriveResolver, resolve_drive_link
from .registry import resolve, resolve_or_passthrough, register

__all__ = [
    'Provider',
    'ResolutionState',
    'DEFAULT_SETTINGS',
    'ResolveError',
    'NotRecognized',
    'NetworkFailure',
    'UnexpectedStatus',
    'TokenNotFound',
    'ListingError',
    'ShareLink',
    'Hop',
    'WalkResult',
    'ResolveOptions',
    'ResolutionOutcome',
    'DownloadEntry',
    'SkippedItem',
    'ResolutionDescriptor',
    'classify',
    'extract_share_link',
    'CookieJar',
    'walk',
    'DEFAULT_MAX_HOPS',
    'extract_confirm_token',
    'match_confirm_token',
    'DriveResolver',
    'resolve_drive_link',
    'resolve',
    'resolve_or_passthrough',
    'register',
]
