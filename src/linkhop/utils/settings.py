"""
设置加载模块
默认设置 + 配置文件中的 "settings" + 环境变量
"""
import json
import os
from typing import Optional

from ..core.constants import DEFAULT_SETTINGS
from .paths import get_config_file


def _env_overrides() -> dict:
    """读取环境变量中的设置"""
    overrides = {}

    max_hops = os.getenv("LINKHOP_MAX_HOPS", "").strip()
    if max_hops:
        try:
            overrides["max_hops"] = int(max_hops)
        except ValueError:
            print(f"⚠️ 忽略无效的 LINKHOP_MAX_HOPS: {max_hops}")

    timeout = os.getenv("LINKHOP_TIMEOUT", "").strip()
    if timeout:
        try:
            value = float(timeout)
            overrides["timeout"] = [value, value]
        except ValueError:
            print(f"⚠️ 忽略无效的 LINKHOP_TIMEOUT: {timeout}")

    user_agent = os.getenv("LINKHOP_USER_AGENT", "").strip()
    if user_agent:
        overrides["user_agent"] = user_agent

    return overrides


def _is_positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _is_valid_timeout(value) -> bool:
    """timeout 可以是单个秒数，或者 [连接超时, 读取超时]"""
    if isinstance(value, (list, tuple)):
        return len(value) == 2 and all(_is_positive_number(v) for v in value)
    return _is_positive_number(value)


def load_settings(path: Optional[str] = None) -> dict:
    """加载设置

    Args:
        path: 配置文件路径，默认使用数据目录下的 config.json

    Returns:
        合并后的设置字典（每次调用返回新的字典）
    """
    config_file = path or get_config_file()
    settings = dict(DEFAULT_SETTINGS)

    if os.path.exists(config_file):
        try:
            with open(config_file, "r", encoding='utf-8') as f:
                app_data = json.load(f)
            file_settings = app_data.get("settings", {}) if isinstance(app_data, dict) else {}
            if isinstance(file_settings, dict):
                settings.update(file_settings)
        except (json.JSONDecodeError, IOError) as e:
            print(f"⚠️ 加载配置文件失败 {config_file}: {e}")

    settings.update(_env_overrides())

    if not isinstance(settings.get("max_hops"), int) or settings["max_hops"] < 1:
        print(f"⚠️ 无效的 max_hops: {settings.get('max_hops')}，使用默认值")
        settings["max_hops"] = DEFAULT_SETTINGS["max_hops"]

    if not _is_valid_timeout(settings.get("timeout")):
        print(f"⚠️ 无效的 timeout: {settings.get('timeout')}，使用默认值")
        settings["timeout"] = list(DEFAULT_SETTINGS["timeout"])

    return settings
