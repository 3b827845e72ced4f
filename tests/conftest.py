"""测试公共 fixture"""
import os
import time
from datetime import datetime

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from expense_tracker.db.database import Database
from expense_tracker.db.memory import MemoryStore

# 固定的"当前时间"，避免测试依赖真实时钟
FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def new_york_tz(monkeypatch):
    """将本地时区固定为 America/New_York（2024-03-10 02:00 起跳过一小时）"""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset 不可用")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    try:
        # 1970-01-01 00:00 UTC 在纽约为前一天 19:00
        if datetime.fromtimestamp(0).hour != 19:
            pytest.skip("系统缺少 America/New_York 时区数据")
        yield
    finally:
        monkeypatch.undo()
        time.tzset()


@pytest.fixture
def sqlite_store(tmp_path):
    store = Database(tmp_path / "transactions.db", clock=fixed_clock)
    yield store
    store.close()


@pytest.fixture
def memory_store():
    store = MemoryStore(clock=fixed_clock)
    yield store
    store.close()


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path):
    """同一组测试分别在两种存储上运行"""
    if request.param == "sqlite":
        s = Database(tmp_path / "transactions.db", clock=fixed_clock)
    else:
        s = MemoryStore(clock=fixed_clock)
    yield s
    s.close()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
