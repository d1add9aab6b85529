"""
格式化工具函数
"""
import re
from typing import Optional
from urllib.parse import unquote


def format_name_from_template(template: str, data: dict) -> str:
    """根据模板和数据字典格式化名称"""
    name = template
    for key, value in data.items():
        name = name.replace(f"{{{key}}}", str(value) if value is not None else "")
    return sanitize_name(name)


def sanitize_name(name: str) -> str:
    """清理文件名中的非法字符"""
    name = re.sub(r'[\\/:*?"<>|]', '', name or "")
    name = name.rstrip('. ')
    name = name.strip()
    if len(name) > 150:
        name = name[:150].rstrip('. ')
    return name if name else "untitled"


def filename_from_disposition(value: Optional[str]) -> Optional[str]:
    """从 Content-Disposition 中读取文件名，支持 RFC 5987 的 filename*="""
    if not value:
        return None
    extended = re.search(r"filename\*\s*=\s*(?:[\w-]+'[^']*')?([^;]+)", value, re.IGNORECASE)
    if extended:
        return unquote(extended.group(1).strip().strip('"')) or None
    plain = re.search(r'filename\s*=\s*"?([^";]+)"?', value, re.IGNORECASE)
    if plain:
        return plain.group(1).strip() or None
    return None
