from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _local_millis(value: datetime) -> int:
    seconds = int(value.replace(microsecond=0).timestamp())
    return seconds * 1000 + value.microsecond // 1000


def truncate_to_millis(value: datetime) -> datetime:
    """
    规范化为持久化时的取值：毫秒精度的本地无时区时间

    带时区的时间先转换为本地时间；夏令时跳过的不存在时刻（如 2:30）
    经时间戳换算后落到实际时刻（3:30），与从数据库读回的值一致。
    """
    return from_epoch_millis(_local_millis(_to_local_naive(value)))


def to_epoch_millis(value: datetime) -> int:
    """本地时间 -> 毫秒时间戳"""
    return _local_millis(_to_local_naive(value))


def from_epoch_millis(millis: int) -> datetime:
    """毫秒时间戳 -> 本地时间"""
    seconds, remainder = divmod(int(millis), 1000)
    return datetime.fromtimestamp(seconds).replace(microsecond=remainder * 1000)


@dataclass(frozen=True, slots=True)
class Transaction:
    """记账交易数据模型（不可变；id 由存储层在插入时分配）"""
    id: Optional[int] = None
    title: str = ""
    amount: float = 0.0  # 金额绝对值，正负由 is_income 决定
    date: datetime = field(default_factory=datetime.now)
    is_income: bool = False
    category: str = ""

    def __post_init__(self) -> None:
        # 持久化精度为毫秒，两种存储需保持一致
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", truncate_to_millis(self.date))
        if isinstance(self.amount, int) and not isinstance(self.amount, bool):
            object.__setattr__(self, "amount", float(self.amount))

    @property
    def signed_amount(self) -> float:
        """带符号金额（仅用于展示）"""
        return self.amount if self.is_income else -self.amount

    def with_id(self, transaction_id: int) -> "Transaction":
        """返回分配了 id 的副本"""
        return replace(self, id=transaction_id)

    def to_row(self) -> Dict[str, Any]:
        """转换为存储层的扁平映射（date 为毫秒时间戳，isIncome 为 0/1）"""
        return {
            "id": self.id,
            "title": self.title,
            "amount": self.amount,
            "date": to_epoch_millis(self.date),
            "isIncome": 1 if self.is_income else 0,
            "category": self.category,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Transaction":
        """从数据库行创建Transaction对象"""
        return cls(
            id=row["id"],
            title=row["title"],
            amount=float(row["amount"]),
            date=from_epoch_millis(row["date"]),
            is_income=row["isIncome"] == 1,
            category=row["category"],
        )
