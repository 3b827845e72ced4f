"""交易表格数据模型模块"""
from typing import List, Optional, Any, Final
from enum import IntEnum

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from expense_tracker.models.transaction import Transaction
from expense_tracker.settings import format_signed_money
from expense_tracker.ui.theme import get_amount_color


class TransactionColumn(IntEnum):
    """交易表格列定义"""
    DATE = 0
    TITLE = 1
    CATEGORY = 2
    TYPE = 3
    AMOUNT = 4


COLUMN_HEADERS: Final = ["Date", "Title", "Category", "Type", "Amount"]


class TransactionTableModel(QAbstractTableModel):
    """交易表格数据模型（Model/View架构）"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._transactions: List[Transaction] = []

    def set_transactions(self, transactions: List[Transaction]) -> None:
        """设置交易数据"""
        self.beginResetModel()
        self._transactions = list(transactions)
        self.endResetModel()

    def get_transaction(self, row: int) -> Optional[Transaction]:
        """根据行号获取交易对象"""
        if 0 <= row < len(self._transactions):
            return self._transactions[row]
        return None

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._transactions)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(TransactionColumn)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._transactions)):
            return None

        tx = self._transactions[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == TransactionColumn.DATE:
                return f"{tx.date.day}/{tx.date.month}/{tx.date.year}"
            elif col == TransactionColumn.TITLE:
                return tx.title
            elif col == TransactionColumn.CATEGORY:
                return tx.category
            elif col == TransactionColumn.TYPE:
                return "Income" if tx.is_income else "Expense"
            elif col == TransactionColumn.AMOUNT:
                return format_signed_money(tx.amount, tx.is_income)

        elif role == Qt.TextAlignmentRole:
            if col == TransactionColumn.AMOUNT:
                return Qt.AlignRight | Qt.AlignVCenter
            return Qt.AlignLeft | Qt.AlignVCenter

        elif role == Qt.ForegroundRole:
            if col in (TransactionColumn.TYPE, TransactionColumn.AMOUNT):
                return QColor(get_amount_color(tx.is_income))

        elif role == Qt.UserRole:
            return tx

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            if 0 <= section < len(COLUMN_HEADERS):
                return COLUMN_HEADERS[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable
