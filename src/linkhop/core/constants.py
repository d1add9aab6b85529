"""
常量和枚举定义
"""
import re
from enum import Enum, auto


class Provider(Enum):
    """分享链接所属的服务类型"""
    DRIVE_FILE = auto()
    DRIVE_USERCONTENT = auto()
    GOFILE = auto()
    UNRECOGNIZED = auto()


class ResolutionState(Enum):
    """解析状态机的状态"""
    START = auto()
    PRIMARY_FETCH = auto()
    DIRECT_HIT = auto()
    INTERSTITIAL = auto()
    OTHER_NONDIRECT = auto()


# Google Drive 前端与直连内容域名
DRIVE_FRONT_BASE = "https://drive.google.com"
DRIVE_USERCONTENT_BASE = "https://drive.usercontent.google.com"

# 直接返回文件内容的域名
DIRECT_CONTENT_HOST_RE = re.compile(
    r"^(?:[a-z0-9-]+\.)*(?:googleusercontent\.com|drive\.usercontent\.google\.com)$",
    re.IGNORECASE,
)

# 风险提示 Cookie 名称前缀，例如 download_warning_13058876669334088843_<id>
WARNING_COOKIE_PREFIX = "download_warning"


# 默认设置
DEFAULT_SETTINGS = {
    "max_hops": 10,
    "timeout": [10, 30],  # [连接超时, 读取超时]
    "user_agent": None,  # None 表示自动生成
    "accept_language": None,  # None 表示根据系统语言生成
    "fallback_name_template": "{provider}_{resource_id}",
    "api_retries": 3,
    "api_base": "https://api.gofile.io",
}
