"""
文件检测模块
从列表接口的数据中检测和提取可下载的文件
"""
from typing import List, Optional, Tuple

from .errors import ListingError
from .models import DownloadEntry, SkippedItem


def _as_items(value) -> list:
    """内容可能是列表，也可能是 {id: item} 形式的字典"""
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        return [item for item in value.values() if isinstance(item, dict)]
    return []


def _item_type(item: dict) -> str:
    return str(item.get("type") or "").lower()


def _direct_link(item: dict) -> Optional[str]:
    # link 很多时候是下载页，但有时就是直链
    return item.get("directLink") or item.get("link") or item.get("url")


def _is_file(item: dict) -> bool:
    if item.get("type"):
        return _item_type(item) == "file"
    return bool(_direct_link(item))


def pick_best_name(item: dict) -> str:
    """文件名有时在 name，有时在 filename"""
    return item.get("name") or item.get("filename") or "downloaded_file"


def detect_files_from_content(data: dict, source_url: str, headers: Optional[dict] = None) -> Tuple[List[DownloadEntry], List[SkippedItem]]:
    """从内容数据中检测可下载文件

    单个条目缺少下载地址时跳过并记录，不影响其他条目。

    Args:
        data: 接口返回的 data 字典
        source_url: 用于错误信息的来源地址
        headers: 附加到每个文件请求的请求头

    Returns:
        (文件列表, 跳过的条目列表)

    Raises:
        ListingError: 没有内容，或者没有任何可下载的文件
    """
    contents = data.get("contents") or data.get("children") or data.get("files")
    if not contents:
        raise ListingError(source_url, "没有找到内容（可能需要密码、受保护或已删除）")

    items = _as_items(contents)
    file_items = [item for item in items if _is_file(item)]

    if not file_items:
        # 内容可能是文件夹，尝试读取一层子文件夹中的文件
        for folder in items:
            if _item_type(folder) == "folder" and folder.get("children"):
                file_items.extend(
                    child for child in _as_items(folder["children"])
                    if _item_type(child) == "file" or _direct_link(child)
                )

    if not file_items:
        raise ListingError(source_url, "没有可下载的文件（可能需要密码或登录）")

    files, skipped = [], []
    seen_urls = set()
    for item in file_items:
        name = pick_best_name(item)
        url = _direct_link(item)
        if not url:
            skipped.append(SkippedItem(name, "缺少下载地址"))
            continue
        # 去重检查
        if url in seen_urls:
            continue
        seen_urls.add(url)
        files.append(DownloadEntry(name=name, url=url, headers=dict(headers or {})))

    if not files:
        raise ListingError(source_url, "无法提取任何直链")

    return files, skipped
