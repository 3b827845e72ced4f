"""交易筛选条件模型"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from expense_tracker.models.transaction import Transaction
from expense_tracker.settings import ALL_CATEGORIES

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class TransactionFilter:
    """
    交易筛选条件，各条件之间为 AND 关系

    - category: 精确匹配；ALL_CATEGORIES（或 None）表示不限
    - is_income: None 表示收支均可
    - start_date / end_date: 按天闭区间，边界当天的记录包含在内
    """
    category: Optional[str] = ALL_CATEGORIES
    is_income: Optional[bool] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None

    @property
    def category_active(self) -> bool:
        return self.category is not None and self.category != ALL_CATEGORIES

    @property
    def is_empty(self) -> bool:
        """没有任何生效的筛选条件"""
        return (
            not self.category_active
            and self.is_income is None
            and self.start_date is None
            and self.end_date is None
        )

    @property
    def range_start(self) -> Optional[datetime]:
        """区间起点（含）：起始日 00:00"""
        if self.start_date is None:
            return None
        return datetime.combine(_as_date(self.start_date), time.min)

    @property
    def range_end(self) -> Optional[datetime]:
        """区间终点（不含）：结束日次日 00:00"""
        if self.end_date is None:
            return None
        return datetime.combine(_as_date(self.end_date) + timedelta(days=1), time.min)

    def matches(self, transaction: Transaction) -> bool:
        if self.category_active and transaction.category != self.category:
            return False
        if self.is_income is not None and transaction.is_income != self.is_income:
            return False
        start, end = self.range_start, self.range_end
        if start is not None and transaction.date < start:
            return False
        if end is not None and transaction.date >= end:
            return False
        return True
