"""
Expense Tracker - 本地收支记账应用
"""
from expense_tracker.models.transaction import Transaction
from expense_tracker.models.filter import TransactionFilter
from expense_tracker.db.store import TransactionStore, open_store, durable_backend_available
from expense_tracker.db.memory import MemoryStore
from expense_tracker.services.statistics_service import (
    StatisticsService, PeriodSummary, compute_balance, compute_totals
)
from expense_tracker.errors import ExpenseTrackerError, BackendUnavailable, ValidationError
from expense_tracker.settings import (
    VERSION, APP_NAME, CURRENCY_SYMBOL, ALL_CATEGORIES,
    INCOME_CATEGORIES, EXPENSE_CATEGORIES,
    format_money, format_signed_money
)

__all__ = [
    # 数据模型
    "Transaction",
    "TransactionFilter",
    # 存储
    "TransactionStore",
    "MemoryStore",
    "open_store",
    "durable_backend_available",
    # 服务
    "StatisticsService",
    "PeriodSummary",
    "compute_balance",
    "compute_totals",
    # 异常
    "ExpenseTrackerError",
    "BackendUnavailable",
    "ValidationError",
    # 配置
    "VERSION",
    "APP_NAME",
    "CURRENCY_SYMBOL",
    "ALL_CATEGORIES",
    "INCOME_CATEGORIES",
    "EXPENSE_CATEGORIES",
    # 工具函数
    "format_money",
    "format_signed_money",
]
__version__ = VERSION
