"""
Pytest configuration and fixtures for LinkHop tests
"""
import pytest

from linkhop.core.constants import DEFAULT_SETTINGS
from linkhop.core.models import ResolveOptions


TEST_USER_AGENT = "Mozilla/5.0 (LinkHopTest)"


@pytest.fixture
def settings():
    """默认设置的副本"""
    return dict(DEFAULT_SETTINGS)


@pytest.fixture
def options():
    """固定 User-Agent，避免依赖随机生成的值"""
    return ResolveOptions(user_agent=TEST_USER_AGENT)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """把数据目录指向临时目录，清除环境变量覆盖"""
    monkeypatch.setenv("LINKHOP_HOME", str(tmp_path / "home"))
    for name in ("LINKHOP_MAX_HOPS", "LINKHOP_TIMEOUT", "LINKHOP_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "home"
