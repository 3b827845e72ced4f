import logging
import sqlite3
from pathlib import Path
from typing import Any, Final, List, Optional, Tuple, Union

from expense_tracker.db.store import Clock, TransactionStore, month_range
from expense_tracker.errors import BackendUnavailable
from expense_tracker.models.filter import TransactionFilter
from expense_tracker.models.transaction import Transaction, to_epoch_millis
from expense_tracker.settings import DB_PATH, DB_SCHEMA_VERSION
from expense_tracker.validation import validate_transaction

logger: Final = logging.getLogger(__name__)

_COLUMNS: Final = "id, title, amount, date, isIncome, category"


class Database(TransactionStore):
    """SQLite 持久化存储，支持上下文管理器使用方式"""

    def __init__(self, db_path: Optional[Union[str, Path]] = None, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._db_path = str(db_path or DB_PATH)
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._init_db()

    def _connect(self) -> None:
        """建立数据库连接，失败时抛出 BackendUnavailable"""
        try:
            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self._db_path)
        except (OSError, sqlite3.Error) as e:
            raise BackendUnavailable(f"Cannot open database {self._db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row

    def _init_db(self) -> None:
        """初始化数据库schema"""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)
        cursor.execute("SELECT version FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version < 1:
            self._migrate_v1(cursor)
            logger.info("已创建交易表: %s", self._db_path)

        if current_version < DB_SCHEMA_VERSION:
            cursor.execute("DELETE FROM schema_version")
            cursor.execute("INSERT INTO schema_version (version) VALUES (?)", (DB_SCHEMA_VERSION,))

        self.conn.commit()

    def _migrate_v1(self, cursor: sqlite3.Cursor) -> None:
        """V1: transactions表"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                amount REAL NOT NULL,
                date INTEGER NOT NULL,
                isIncome INTEGER NOT NULL,
                category TEXT NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_transactions_date
            ON transactions(date DESC)
        """)

    def _cursor(self) -> sqlite3.Cursor:
        if self.conn is None:
            raise BackendUnavailable(f"Database {self._db_path} is closed")
        return self.conn.cursor()

    # ==================== Transaction CRUD ====================

    def add_transaction(self, transaction: Transaction) -> int:
        """新增交易"""
        cursor = self._cursor()
        validate_transaction(transaction)
        row = transaction.to_row()
        cursor.execute("""
            INSERT INTO transactions (title, amount, date, isIncome, category)
            VALUES (?, ?, ?, ?, ?)
        """, (
            row["title"],
            float(row["amount"]),
            row["date"],
            row["isIncome"],
            row["category"],
        ))
        self.conn.commit()
        logger.debug("新增交易 id=%s", cursor.lastrowid)
        return cursor.lastrowid

    def delete_transaction(self, transaction_id: int) -> None:
        """删除交易"""
        cursor = self._cursor()
        cursor.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
        self.conn.commit()
        if cursor.rowcount:
            logger.debug("删除交易 id=%s", transaction_id)

    def get_transaction_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """根据ID获取交易"""
        cursor = self._cursor()
        cursor.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (transaction_id,))
        row = cursor.fetchone()
        return Transaction.from_row(row) if row else None

    def get_transactions(self, filter: Optional[TransactionFilter] = None) -> List[Transaction]:
        """按筛选条件查询交易，按日期倒序（同一时间按插入顺序）"""
        where_clause, params = self._build_where(filter)
        cursor = self._cursor()
        cursor.execute(
            f"SELECT {_COLUMNS} FROM transactions {where_clause} ORDER BY date DESC, id ASC",
            params,
        )
        return [Transaction.from_row(row) for row in cursor.fetchall()]

    @staticmethod
    def _build_where(filter: Optional[TransactionFilter]) -> Tuple[str, List[Any]]:
        """将筛选条件转换为参数化的 WHERE 子句"""
        if filter is None:
            return "", []

        conditions: List[str] = []
        params: List[Any] = []

        if filter.category_active:
            conditions.append("category = ?")
            params.append(filter.category)

        if filter.is_income is not None:
            conditions.append("isIncome = ?")
            params.append(1 if filter.is_income else 0)

        if filter.range_start is not None:
            conditions.append("date >= ?")
            params.append(to_epoch_millis(filter.range_start))

        if filter.range_end is not None:
            conditions.append("date < ?")
            params.append(to_epoch_millis(filter.range_end))

        if not conditions:
            return "", []
        return "WHERE " + " AND ".join(conditions), params

    # ==================== Statistics ====================

    def get_monthly_totals(self) -> Tuple[float, float]:
        """本月收支汇总"""
        start, end = month_range(self.clock())
        cursor = self._cursor()
        cursor.execute("""
            SELECT
                SUM(CASE WHEN isIncome = 1 THEN amount ELSE 0 END) AS totalIncome,
                SUM(CASE WHEN isIncome = 0 THEN amount ELSE 0 END) AS totalExpense
            FROM transactions
            WHERE date >= ? AND date <= ?
        """, (to_epoch_millis(start), to_epoch_millis(end)))
        row = cursor.fetchone()
        return float(row["totalIncome"] or 0.0), float(row["totalExpense"] or 0.0)

    def close(self) -> None:
        """关闭数据库连接"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
