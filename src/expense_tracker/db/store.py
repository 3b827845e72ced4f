"""交易存储抽象层：持久化（SQLite）与内存两种实现，以及自动选择工厂"""
import importlib
import logging
import sys
from abc import ABC, abstractmethod
from calendar import monthrange
from datetime import datetime
from pathlib import Path
from typing import Callable, Final, List, Optional, Tuple, Union

from expense_tracker.errors import BackendUnavailable
from expense_tracker.models.filter import TransactionFilter
from expense_tracker.models.transaction import Transaction

logger: Final = logging.getLogger(__name__)

# 时钟：返回"当前时间"，用于本月统计（测试中注入固定时间）
Clock = Callable[[], datetime]

# 不提供嵌入式关系数据库的平台（浏览器 / WASM 运行环境）
_UNSUPPORTED_PLATFORMS: Final = ("emscripten", "wasi")


def month_range(now: datetime) -> Tuple[datetime, datetime]:
    """获取 now 所在自然月的第一个时刻与最后一个时刻（均含）"""
    _, last_day = monthrange(now.year, now.month)
    start = datetime(now.year, now.month, 1)
    end = datetime(now.year, now.month, last_day, 23, 59, 59, 999000)
    return start, end


class TransactionStore(ABC):
    """
    交易存储接口

    两种实现对相同的操作序列必须给出相同的可观察结果：
    - 查询结果按 date 倒序，date 相同时按插入顺序
    - 删除不存在的 id 为静默空操作
    - id 单调递增，删除后不复用
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or datetime.now

    def __enter__(self) -> "TransactionStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> int:
        """新增交易，返回分配的 id"""

    @abstractmethod
    def get_transactions(self, filter: Optional[TransactionFilter] = None) -> List[Transaction]:
        """按筛选条件查询交易，按日期倒序"""

    @abstractmethod
    def get_transaction_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """根据ID获取交易"""

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """删除交易（不存在时忽略）"""

    @abstractmethod
    def get_monthly_totals(self) -> Tuple[float, float]:
        """本月 (收入合计, 支出合计)，"本月"以 clock() 为准"""

    def get_all_transactions(self) -> List[Transaction]:
        """获取所有交易，按日期倒序"""
        return self.get_transactions(None)

    def close(self) -> None:
        """释放资源；关闭后不可再使用（重复调用无副作用）"""


def durable_backend_available() -> bool:
    """平台能力检查：当前环境是否可以使用 SQLite 持久化存储"""
    if sys.platform in _UNSUPPORTED_PLATFORMS:
        return False
    try:
        importlib.import_module("sqlite3")
    except ImportError:
        return False
    return True


def open_store(
    db_path: Optional[Union[str, Path]] = None,
    clock: Optional[Clock] = None,
    prefer_durable: bool = True,
) -> TransactionStore:
    """
    打开交易存储

    优先使用 SQLite；平台不支持或数据库无法打开时，静默回退到内存存储
    （仅记录警告日志，不向调用方抛出）。
    """
    from expense_tracker.db.memory import MemoryStore

    if prefer_durable:
        try:
            if not durable_backend_available():
                raise BackendUnavailable(f"SQLite is not available on {sys.platform}")
            from expense_tracker.db.database import Database
            return Database(db_path, clock=clock)
        except BackendUnavailable as e:
            logger.warning("持久化存储不可用，使用内存存储: %s", e)

    return MemoryStore(clock=clock)
