import logging
import sqlite3
from dataclasses import replace
from typing import Optional, Final

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QTableView, QHeaderView,
    QMessageBox, QStatusBar, QButtonGroup
)
from PySide6.QtGui import QCloseEvent, QAction, QKeySequence, QShortcut

from expense_tracker.db.store import TransactionStore, open_store
from expense_tracker.errors import BackendUnavailable, ExpenseTrackerError, ValidationError
from expense_tracker.models.filter import TransactionFilter
from expense_tracker.models.transaction import Transaction
from expense_tracker.services.statistics_service import StatisticsService
from expense_tracker.settings import APP_NAME, TYPE_FILTERS, format_signed_money
from expense_tracker.ui.dashboard_widget import DashboardWidget
from expense_tracker.ui.filter_dialog import FilterDialog
from expense_tracker.ui.transaction_dialog import TransactionDialog
from expense_tracker.ui.transaction_model import TransactionTableModel

logger: Final = logging.getLogger(__name__)

_TYPE_CHIP_LABELS: Final = {"All": "All Types", "Income": "Income", "Expense": "Expense"}


class MainWindow(QMainWindow):
    """主窗口"""

    def __init__(self, store: Optional[TransactionStore] = None):
        super().__init__()
        self.store = store if store is not None else open_store()
        self.stats_service = StatisticsService(self.store)
        self.current_filter = TransactionFilter()

        self.setWindowTitle(APP_NAME)
        self.resize(900, 700)

        self._init_menu()
        self._init_ui()
        self._init_shortcuts()
        self._init_statusbar()

        self._refresh_all()

    def _init_menu(self) -> None:
        """初始化菜单栏"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        new_action = QAction("Add Transaction", self)
        new_action.setShortcut(QKeySequence.New)
        new_action.triggered.connect(self._on_new_transaction)
        file_menu.addAction(new_action)

        file_menu.addSeparator()

        exit_action = QAction("Quit", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("Edit")

        delete_action = QAction("Delete Transaction", self)
        delete_action.triggered.connect(self._on_delete_transaction)
        edit_menu.addAction(delete_action)

        filter_action = QAction("Filter…", self)
        filter_action.triggered.connect(self._on_open_filter)
        edit_menu.addAction(filter_action)

    def _init_ui(self) -> None:
        """初始化界面"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        # 总览卡片
        self.dashboard = DashboardWidget(self.stats_service)
        layout.addWidget(self.dashboard)

        body = QVBoxLayout()
        body.setContentsMargins(10, 10, 10, 10)

        # 类型筛选 chips
        chips_layout = QHBoxLayout()
        self.type_group = QButtonGroup(self)
        self.type_group.setExclusive(True)
        for i, key in enumerate(TYPE_FILTERS):
            chip = QPushButton(_TYPE_CHIP_LABELS[key])
            chip.setCheckable(True)
            chip.setChecked(i == 0)
            self.type_group.addButton(chip, i)
            chips_layout.addWidget(chip)
        self.type_group.idClicked.connect(self._on_type_chip_clicked)

        chips_layout.addStretch()

        filter_btn = QPushButton("Filter…")
        filter_btn.clicked.connect(self._on_open_filter)
        chips_layout.addWidget(filter_btn)

        clear_btn = QPushButton("Clear Filters")
        clear_btn.clicked.connect(self._on_clear_filters)
        chips_layout.addWidget(clear_btn)

        body.addLayout(chips_layout)

        # 工具栏
        toolbar_layout = QHBoxLayout()
        self.count_label = QLabel("0 items")
        toolbar_layout.addWidget(self.count_label)
        toolbar_layout.addStretch()

        new_btn = QPushButton("Add Transaction")
        new_btn.clicked.connect(self._on_new_transaction)
        toolbar_layout.addWidget(new_btn)

        delete_btn = QPushButton("Delete")
        delete_btn.clicked.connect(self._on_delete_transaction)
        toolbar_layout.addWidget(delete_btn)

        body.addLayout(toolbar_layout)

        # 交易列表（使用Model/View架构）
        self.transaction_model = TransactionTableModel()
        self.transaction_view = QTableView()
        self.transaction_view.setModel(self.transaction_model)
        self.transaction_view.setSelectionBehavior(QTableView.SelectRows)
        self.transaction_view.setSelectionMode(QTableView.SingleSelection)
        self.transaction_view.setAlternatingRowColors(True)
        self.transaction_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        body.addWidget(self.transaction_view)

        self.empty_label = QLabel("No transactions yet")
        self.empty_label.setStyleSheet("color: gray; font-size: 14px; padding: 24px;")
        body.addWidget(self.empty_label)

        layout.addLayout(body)

    def _init_shortcuts(self) -> None:
        """初始化键盘快捷键"""
        delete_shortcut = QShortcut(QKeySequence.Delete, self.transaction_view)
        delete_shortcut.activated.connect(self._on_delete_transaction)

    def _init_statusbar(self) -> None:
        """初始化状态栏"""
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.statusbar.showMessage("Ready")

    def _refresh_all(self) -> None:
        """重新查询筛选视图并重算统计"""
        try:
            transactions = self.store.get_transactions(self.current_filter)
            self.transaction_model.set_transactions(transactions)
            self.dashboard.refresh()
        except (sqlite3.Error, ExpenseTrackerError) as e:
            logger.exception("刷新数据失败")
            QMessageBox.critical(self, "Error", f"Failed to load transactions: {e}")
            return

        self.count_label.setText(f"{len(transactions)} items")
        self.empty_label.setVisible(not transactions)
        self.transaction_view.setVisible(bool(transactions))
        if self.current_filter.is_empty:
            self.empty_label.setText("No transactions yet")
        else:
            self.empty_label.setText("No transactions found")

    def apply_filter(self, transaction_filter: TransactionFilter) -> None:
        """更新筛选条件并刷新"""
        self.current_filter = transaction_filter
        type_index = list(TYPE_FILTERS.values()).index(transaction_filter.is_income)
        self.type_group.button(type_index).setChecked(True)
        self._refresh_all()

    def _on_type_chip_clicked(self, index: int) -> None:
        is_income = list(TYPE_FILTERS.values())[index]
        self.apply_filter(replace(self.current_filter, is_income=is_income))

    def _on_open_filter(self) -> None:
        dialog = FilterDialog(self.current_filter, self)
        if dialog.exec() == FilterDialog.Accepted:
            result = dialog.get_result()
            if result is not None:
                self.apply_filter(result)

    def _on_clear_filters(self) -> None:
        self.apply_filter(TransactionFilter())

    def _get_selected_transaction(self) -> Optional[Transaction]:
        """获取当前选中的交易"""
        indexes = self.transaction_view.selectedIndexes()
        if not indexes:
            return None
        return self.transaction_model.get_transaction(indexes[0].row())

    def add_transaction(self, transaction: Transaction) -> Optional[int]:
        """保存交易并刷新，失败时弹窗提示"""
        try:
            transaction_id = self.store.add_transaction(transaction)
        except ValidationError as e:
            QMessageBox.warning(self, "Invalid input", str(e))
            return None
        except (sqlite3.Error, BackendUnavailable) as e:
            logger.exception("保存交易失败")
            QMessageBox.critical(self, "Save failed", f"Storage error: {e}")
            return None
        self._refresh_all()
        self.statusbar.showMessage("Transaction added", 3000)
        return transaction_id

    def delete_transaction(self, transaction_id: int) -> None:
        """删除交易并刷新"""
        try:
            self.store.delete_transaction(transaction_id)
        except (sqlite3.Error, BackendUnavailable) as e:
            logger.exception("删除交易失败")
            QMessageBox.critical(self, "Delete failed", f"Storage error: {e}")
            return
        self._refresh_all()
        self.statusbar.showMessage("Transaction deleted", 3000)

    def _on_new_transaction(self) -> None:
        """新增交易"""
        dialog = TransactionDialog(self, clock=self.store.clock)
        if dialog.exec() == TransactionDialog.Accepted:
            tx = dialog.get_result()
            if tx:
                self.add_transaction(tx)

    def _on_delete_transaction(self) -> None:
        """删除交易"""
        tx = self._get_selected_transaction()
        if not tx:
            QMessageBox.information(self, "Delete", "Select a transaction to delete first")
            return

        reply = QMessageBox.question(
            self,
            "Confirm Delete",
            f"Delete this transaction?\n\n"
            f"{tx.title} ({tx.category})\n"
            f"{format_signed_money(tx.amount, tx.is_income)}",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.delete_transaction(tx.id)

    def closeEvent(self, event: QCloseEvent) -> None:
        """窗口关闭事件"""
        self.store.close()
        event.accept()
