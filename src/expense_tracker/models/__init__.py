"""数据模型模块"""
from expense_tracker.models.transaction import Transaction
from expense_tracker.models.filter import TransactionFilter

__all__ = ["Transaction", "TransactionFilter"]
