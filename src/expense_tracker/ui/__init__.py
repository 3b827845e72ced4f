"""用户界面模块"""
from expense_tracker.ui.main_window import MainWindow
from expense_tracker.ui.transaction_dialog import TransactionDialog
from expense_tracker.ui.filter_dialog import FilterDialog
from expense_tracker.ui.transaction_model import TransactionTableModel
from expense_tracker.ui.dashboard_widget import DashboardWidget, SummaryCard
from expense_tracker.ui.theme import (
    COLOR_INCOME, COLOR_EXPENSE,
    get_text_color, get_secondary_text_color,
    get_card_style, get_amount_color, get_balance_color
)

__all__ = [
    # 窗口和组件
    "MainWindow",
    "TransactionDialog",
    "FilterDialog",
    "TransactionTableModel",
    "DashboardWidget",
    "SummaryCard",
    # 主题常量和函数
    "COLOR_INCOME",
    "COLOR_EXPENSE",
    "get_text_color",
    "get_secondary_text_color",
    "get_card_style",
    "get_amount_color",
    "get_balance_color",
]
