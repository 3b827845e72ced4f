"""交易筛选对话框模块"""
from datetime import date
from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QComboBox, QDateEdit, QCheckBox, QPushButton
)
from PySide6.QtCore import QDate

from expense_tracker.models.filter import TransactionFilter
from expense_tracker.settings import ALL_CATEGORIES, TYPE_FILTERS, filter_categories


class FilterDialog(QDialog):
    """筛选条件对话框：类型、分类、日期区间（按天闭区间，起止均可单独设置）"""

    def __init__(self, current: Optional[TransactionFilter] = None, parent=None):
        super().__init__(parent)
        self.current = current or TransactionFilter()
        self.result_filter: Optional[TransactionFilter] = None
        self._init_ui()
        self._load_filter(self.current)

    def _init_ui(self) -> None:
        self.setWindowTitle("Filter Transactions")
        self.setMinimumWidth(360)

        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.setSpacing(12)

        self.type_combo = QComboBox()
        for label in TYPE_FILTERS:
            self.type_combo.addItem(label)
        form_layout.addRow("Type:", self.type_combo)

        self.category_combo = QComboBox()
        self.category_combo.addItems(filter_categories())
        form_layout.addRow("Category:", self.category_combo)

        # 日期区间：勾选后对应边界生效
        today = QDate.currentDate()
        self.start_check, self.start_input = self._add_bound_row(form_layout, "From:", today.addDays(-30))
        self.end_check, self.end_input = self._add_bound_row(form_layout, "To:", today)

        clear_range_btn = QPushButton("Clear Date Range")
        clear_range_btn.clicked.connect(self._on_clear_range)
        form_layout.addRow(clear_range_btn)

        layout.addLayout(form_layout)

        btn_layout = QHBoxLayout()
        clear_all_btn = QPushButton("Clear All")
        clear_all_btn.clicked.connect(self._on_clear_all)
        btn_layout.addWidget(clear_all_btn)
        btn_layout.addStretch()

        apply_btn = QPushButton("Apply Filters")
        apply_btn.setDefault(True)
        apply_btn.clicked.connect(self._on_apply)
        btn_layout.addWidget(apply_btn)

        layout.addLayout(btn_layout)

    @staticmethod
    def _add_bound_row(form_layout: QFormLayout, label: str, initial: QDate):
        check = QCheckBox()
        date_input = QDateEdit()
        date_input.setCalendarPopup(True)
        date_input.setDate(initial)
        date_input.setEnabled(False)
        check.toggled.connect(date_input.setEnabled)

        row = QHBoxLayout()
        row.addWidget(check)
        row.addWidget(date_input, 1)
        form_layout.addRow(label, row)
        return check, date_input

    @staticmethod
    def _load_bound(check: QCheckBox, date_input: QDateEdit, value: Optional[date]) -> None:
        check.setChecked(value is not None)
        if value is not None:
            date_input.setDate(QDate(value.year, value.month, value.day))

    def _load_filter(self, current: TransactionFilter) -> None:
        """将已有筛选条件回填到表单"""
        type_values = list(TYPE_FILTERS.values())
        self.type_combo.setCurrentIndex(type_values.index(current.is_income))

        idx = self.category_combo.findText(current.category or ALL_CATEGORIES)
        self.category_combo.setCurrentIndex(max(idx, 0))

        self._load_bound(self.start_check, self.start_input, current.start_date)
        self._load_bound(self.end_check, self.end_input, current.end_date)

    def _on_clear_range(self) -> None:
        self.start_check.setChecked(False)
        self.end_check.setChecked(False)

    def _on_clear_all(self) -> None:
        self._load_filter(TransactionFilter())

    def build_filter(self) -> TransactionFilter:
        """根据表单内容构建筛选条件"""
        start_date = self.start_input.date().toPython() if self.start_check.isChecked() else None
        end_date = self.end_input.date().toPython() if self.end_check.isChecked() else None
        return TransactionFilter(
            category=self.category_combo.currentText(),
            is_income=list(TYPE_FILTERS.values())[self.type_combo.currentIndex()],
            start_date=start_date,
            end_date=end_date,
        )

    def _on_apply(self) -> None:
        self.result_filter = self.build_filter()
        self.accept()

    def get_result(self) -> Optional[TransactionFilter]:
        return self.result_filter
