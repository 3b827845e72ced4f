"""输入校验"""
import math
from datetime import datetime

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction import Transaction


def parse_amount(text: str) -> float:
    """解析表单中输入的金额，必须为有限正数"""
    text = (text or "").strip()
    if not text:
        raise ValidationError("Amount is required")
    try:
        amount = float(text)
    except ValueError:
        raise ValidationError(f"Invalid amount: {text!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Amount must be a positive number")
    return amount


def validate_transaction(transaction: Transaction) -> Transaction:
    """存储层写入前的校验（标题非空、金额为正）"""
    if not isinstance(transaction.title, str) or not transaction.title.strip():
        raise ValidationError("Title must not be empty")

    amount = transaction.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError(f"Invalid amount: {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Amount must be a positive number")

    if not isinstance(transaction.date, datetime):
        raise ValidationError(f"Invalid date: {transaction.date!r}")
    if not isinstance(transaction.category, str):
        raise ValidationError(f"Invalid category: {transaction.category!r}")
    return transaction
