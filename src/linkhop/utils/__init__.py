"""
工具模块
"""
from .network import (
    build_headers,
    build_api_session,
    fetch_once,
    parse_json_response,
    COMMON_HEADERS,
    API_HEADERS,
)
from .paths import get_data_dir, get_config_file, get_crash_log_file
from .settings import load_settings
from .formatters import format_name_from_template, sanitize_name, filename_from_disposition

__all__ = [
    'build_headers',
    'build_api_session',
    'fetch_once',
    'parse_json_response',
    'COMMON_HEADERS',
    'API_HEADERS',
    'get_data_dir',
    'get_config_file',
    'get_crash_log_file',
    'load_settings',
    'format_name_from_template',
    'sanitize_name',
    'filename_from_disposition',
]
