"""UI 主题工具模块 - 收支语义颜色与随系统主题变化的调色板颜色"""
from typing import Final

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette


# 收入绿色、支出红色
COLOR_INCOME: Final = "#2e7d32"
COLOR_EXPENSE: Final = "#c62828"


def _palette_color(role: QPalette.ColorRole) -> str:
    return QApplication.palette().color(role).name()


def get_text_color() -> str:
    """正文颜色（跟随系统主题）"""
    return _palette_color(QPalette.WindowText)


def get_secondary_text_color() -> str:
    """次要文字颜色，用于卡片标题"""
    return _palette_color(QPalette.PlaceholderText)


def get_card_style(selector: str = "SummaryCard") -> str:
    """卡片样式表：底色取 Base，边框取 Mid"""
    return f"""
        {selector} {{
            background-color: {_palette_color(QPalette.Base)};
            border: 1px solid {_palette_color(QPalette.Mid)};
            border-radius: 8px;
            padding: 12px;
        }}
    """


def get_amount_color(is_income: bool) -> str:
    """根据收支类型返回金额颜色"""
    return COLOR_INCOME if is_income else COLOR_EXPENSE


def get_balance_color(balance: float) -> str:
    """根据余额正负返回对应颜色（零视为非负）"""
    return get_amount_color(balance >= 0)
