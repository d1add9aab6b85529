import os
import sys


def get_module_directory():
    """
    获取 linkhop 模块目录的绝对路径

    当前文件位置：.../src/linkhop/utils/paths.py
    """
    current_file = os.path.abspath(__file__)
    utils_dir = os.path.dirname(current_file)     # .../src/linkhop/utils
    return os.path.dirname(utils_dir)             # .../src/linkhop


def get_program_root():
    """
    获取程序根目录

    情况1: 打包运行 - 可执行文件所在目录
    情况2: 直接运行 - 项目根目录（src 的上一级）
    """
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    module_dir = get_module_directory()
    src_dir = os.path.dirname(module_dir)
    return os.path.dirname(src_dir)


def get_data_dir():
    """
    数据目录：存储配置和日志

    可以通过 LINKHOP_HOME 环境变量指定，否则使用程序根目录下的 data/
    """
    override = os.getenv("LINKHOP_HOME", "").strip()
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(get_program_root(), "data")


def get_config_file():
    """配置文件路径"""
    return os.path.join(get_data_dir(), "config.json")


def get_crash_log_file():
    """崩溃日志文件路径"""
    return os.path.join(get_data_dir(), "logs", "crash.log")
