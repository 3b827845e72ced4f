"""新增交易对话框模块"""
from datetime import datetime
from typing import Callable, Optional, Final

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLineEdit, QComboBox, QPushButton, QMessageBox
)

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction import Transaction
from expense_tracker.settings import CURRENCY_SYMBOL, categories_for
from expense_tracker.validation import parse_amount

INVALID_INPUT_MESSAGE: Final = "Please enter valid title and amount"


class TransactionDialog(QDialog):
    """新增交易对话框"""

    def __init__(self, parent=None, clock: Optional[Callable[[], datetime]] = None):
        super().__init__(parent)
        self.clock = clock or datetime.now
        self.result_transaction: Optional[Transaction] = None
        self._init_ui()

    def _init_ui(self) -> None:
        self.setWindowTitle("Add Transaction")
        self.setMinimumWidth(400)

        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.setSpacing(12)

        # 标题
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("e.g. Lunch")
        form_layout.addRow("Title:", self.title_input)

        # 金额
        self.amount_input = QLineEdit()
        self.amount_input.setPlaceholderText(f"0.00 ({CURRENCY_SYMBOL})")
        form_layout.addRow(f"Amount ({CURRENCY_SYMBOL}):", self.amount_input)

        # 类型
        self.type_combo = QComboBox()
        self.type_combo.addItem("Expense", False)
        self.type_combo.addItem("Income", True)
        self.type_combo.currentIndexChanged.connect(self._on_type_changed)
        form_layout.addRow("Type:", self.type_combo)

        # 分类（随类型切换）
        self.category_combo = QComboBox()
        self._populate_categories()
        form_layout.addRow("Category:", self.category_combo)

        layout.addLayout(form_layout)

        # 按钮
        btn_layout = QHBoxLayout()
        btn_layout.addStretch()

        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        btn_layout.addWidget(cancel_btn)

        save_btn = QPushButton("Add Transaction")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_layout.addWidget(save_btn)

        layout.addLayout(btn_layout)

    @property
    def is_income(self) -> bool:
        return bool(self.type_combo.currentData())

    def _populate_categories(self) -> None:
        """填充分类下拉框，默认选中第一项"""
        self.category_combo.clear()
        self.category_combo.addItems(categories_for(self.is_income))
        self.category_combo.setCurrentIndex(0)

    def _on_type_changed(self) -> None:
        """切换收支类型时重置分类"""
        self._populate_categories()

    def build_transaction(self) -> Transaction:
        """根据表单内容构建交易，输入不合法时抛出 ValidationError"""
        title = self.title_input.text().strip()
        if not title:
            raise ValidationError(INVALID_INPUT_MESSAGE)
        try:
            amount = parse_amount(self.amount_input.text())
        except ValidationError:
            raise ValidationError(INVALID_INPUT_MESSAGE)

        return Transaction(
            title=title,
            amount=amount,
            date=self.clock(),
            is_income=self.is_income,
            category=self.category_combo.currentText(),
        )

    def _on_save(self) -> None:
        """保存按钮点击"""
        try:
            self.result_transaction = self.build_transaction()
        except ValidationError as e:
            QMessageBox.warning(self, "Invalid input", str(e))
            return
        self.accept()

    def get_result(self) -> Optional[Transaction]:
        """获取新增结果"""
        return self.result_transaction
