"""统计分析服务模块"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from expense_tracker.db.store import Clock, TransactionStore, month_range
from expense_tracker.models.transaction import Transaction


@dataclass
class PeriodSummary:
    """期间汇总数据"""
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        """结余"""
        return self.income - self.expense

    def as_tuple(self) -> Tuple[float, float]:
        return self.income, self.expense


def compute_totals(transactions: Iterable[Transaction]) -> PeriodSummary:
    """汇总收入与支出"""
    summary = PeriodSummary()
    for tx in transactions:
        if tx.is_income:
            summary.income += tx.amount
        else:
            summary.expense += tx.amount
    return summary


def compute_balance(transactions: Iterable[Transaction]) -> float:
    """结余 = 收入合计 - 支出合计"""
    return compute_totals(transactions).balance


class StatisticsService:
    """
    统计分析服务层

    所有统计都基于存储中的全量交易实时计算（与当前筛选视图无关），不做缓存。
    """

    def __init__(self, store: TransactionStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock: Clock = clock or store.clock

    @staticmethod
    def get_month_range(now: datetime) -> Tuple[datetime, datetime]:
        """获取某时刻所在自然月的起止时刻"""
        return month_range(now)

    def get_overall_summary(self) -> PeriodSummary:
        """全部交易的收支汇总"""
        return compute_totals(self.store.get_all_transactions())

    def get_balance(self) -> float:
        """当前余额（全部交易）"""
        return self.get_overall_summary().balance

    def get_current_month_summary(self) -> PeriodSummary:
        """获取本月收支汇总（"本月" 由 self.clock 决定）"""
        start, end = month_range(self.clock())
        return compute_totals(
            tx for tx in self.store.get_all_transactions() if start <= tx.date <= end
        )

    def get_transaction_count(self) -> int:
        return len(self.store.get_all_transactions())
