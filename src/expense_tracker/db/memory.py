"""内存交易存储（进程生命周期内有效，作为持久化存储的回退方案）"""
import itertools
import logging
from typing import Final, List, Optional, Tuple

from expense_tracker.db.store import Clock, TransactionStore, month_range
from expense_tracker.errors import BackendUnavailable
from expense_tracker.models.filter import TransactionFilter
from expense_tracker.models.transaction import Transaction
from expense_tracker.validation import validate_transaction

logger: Final = logging.getLogger(__name__)


class MemoryStore(TransactionStore):
    """内存存储，每个实例独立持有自己的记录列表（按插入顺序）"""

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._transactions: List[Transaction] = []
        self._ids = itertools.count(1)
        self._closed = False

    def __len__(self) -> int:
        return len(self._transactions)

    def add_transaction(self, transaction: Transaction) -> int:
        self._check_open()
        validate_transaction(transaction)
        transaction_id = next(self._ids)
        self._transactions.append(transaction.with_id(transaction_id))
        logger.debug("新增交易 id=%s", transaction_id)
        return transaction_id

    def get_transactions(self, filter: Optional[TransactionFilter] = None) -> List[Transaction]:
        self._check_open()
        if filter is None or filter.is_empty:
            result = list(self._transactions)
        else:
            result = [tx for tx in self._transactions if filter.matches(tx)]
        # sorted 是稳定排序，reverse=True 时相同日期仍保持插入顺序
        return sorted(result, key=lambda tx: tx.date, reverse=True)

    def get_transaction_by_id(self, transaction_id: int) -> Optional[Transaction]:
        self._check_open()
        for tx in self._transactions:
            if tx.id == transaction_id:
                return tx
        return None

    def delete_transaction(self, transaction_id: int) -> None:
        self._check_open()
        before = len(self._transactions)
        self._transactions = [tx for tx in self._transactions if tx.id != transaction_id]
        if len(self._transactions) != before:
            logger.debug("删除交易 id=%s", transaction_id)

    def get_monthly_totals(self) -> Tuple[float, float]:
        self._check_open()
        start, end = month_range(self.clock())
        income = expense = 0.0
        for tx in self._transactions:
            if start <= tx.date <= end:
                if tx.is_income:
                    income += tx.amount
                else:
                    expense += tx.amount
        return income, expense

    def _check_open(self) -> None:
        if self._closed:
            raise BackendUnavailable("Memory store is closed")

    def close(self) -> None:
        """释放记录；之后的任何操作都会抛出 BackendUnavailable"""
        self._transactions = []
        self._closed = True
