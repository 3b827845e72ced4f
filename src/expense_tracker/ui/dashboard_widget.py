"""首页总览组件模块"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame
)

from expense_tracker.services.statistics_service import StatisticsService
from expense_tracker.settings import format_money
from expense_tracker.ui.theme import (
    COLOR_INCOME, COLOR_EXPENSE,
    get_text_color, get_secondary_text_color, get_card_style, get_balance_color
)


class SummaryCard(QFrame):
    """数据卡片组件"""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Raised)
        self.setStyleSheet(get_card_style())

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(8)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet(f"color: {get_secondary_text_color()}; font-size: 13px;")
        layout.addWidget(self.title_label)

        self.value_label = QLabel(format_money(0))
        self._update_value_style()
        layout.addWidget(self.value_label)

    def _update_value_style(self, color: str = None) -> None:
        if color is None:
            color = get_text_color()
        self.value_label.setStyleSheet(f"color: {color}; font-size: 24px; font-weight: bold;")

    def set_value(self, value: float, color: str = None) -> None:
        """设置金额"""
        self.value_label.setText(format_money(value))
        self._update_value_style(color)

    def set_text(self, text: str, color: str = None) -> None:
        """设置非金额文本（如记录数）"""
        self.value_label.setText(text)
        self._update_value_style(color)


class DashboardWidget(QWidget):
    """
    总览卡片

    余额与收支合计基于全部交易；This Month 为本月（按注入时钟）收支结余。
    """

    def __init__(self, stats_service: StatisticsService, parent=None):
        super().__init__(parent)
        self.stats_service = stats_service
        self._init_ui()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 0)
        layout.setSpacing(12)

        self.balance_card = SummaryCard("Current Balance")
        layout.addWidget(self.balance_card)

        cards_layout = QHBoxLayout()
        cards_layout.setSpacing(12)

        self.income_card = SummaryCard("Income")
        cards_layout.addWidget(self.income_card)

        self.expense_card = SummaryCard("Expense")
        cards_layout.addWidget(self.expense_card)

        self.month_card = SummaryCard("This Month")
        cards_layout.addWidget(self.month_card)

        self.count_card = SummaryCard("Transactions")
        cards_layout.addWidget(self.count_card)

        layout.addLayout(cards_layout)

    def refresh(self) -> None:
        """刷新卡片数据"""
        overall = self.stats_service.get_overall_summary()
        self.balance_card.set_value(overall.balance, get_balance_color(overall.balance))
        self.income_card.set_value(overall.income, COLOR_INCOME)
        self.expense_card.set_value(overall.expense, COLOR_EXPENSE)

        month = self.stats_service.get_current_month_summary()
        now = self.stats_service.clock()
        self.month_card.title_label.setText(f"This Month ({now:%b %Y})")
        self.month_card.set_value(month.balance, get_balance_color(month.balance))

        self.count_card.set_text(str(self.stats_service.get_transaction_count()))
