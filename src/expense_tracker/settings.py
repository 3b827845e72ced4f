"""应用程序配置模块"""
import os
from pathlib import Path
from typing import Final, Dict, List, Optional

# ==================== 路径配置 ====================
# 可通过环境变量覆盖数据目录（目录在打开数据库时才创建）
DATA_DIR: Final = Path(
    os.environ.get("EXPENSE_TRACKER_DATA_DIR", Path.home() / ".expense_tracker")
)
DB_PATH: Final = DATA_DIR / "transactions.db"

# ==================== 应用信息 ====================
APP_NAME: Final = "Expense Tracker"
VERSION: Final = "1.0.0"

# ==================== 数据库配置 ====================
DB_SCHEMA_VERSION: Final = 1

# ==================== 货币设置 ====================
CURRENCY_SYMBOL: Final = "$"

# ==================== 分类 ====================
ALL_CATEGORIES: Final = "All"  # 筛选用哨兵值，匹配任意分类

INCOME_CATEGORIES: Final[List[str]] = [
    "Salary",
    "Freelance",
    "Business",
    "Investment",
    "Other Income",
]

EXPENSE_CATEGORIES: Final[List[str]] = [
    "Food",
    "Transportation",
    "Shopping",
    "Bills",
    "Entertainment",
    "Healthcare",
    "Education",
    "Other",
]

# ==================== 类型筛选 ====================
TYPE_FILTERS: Final[Dict[str, Optional[bool]]] = {
    "All": None,
    "Income": True,
    "Expense": False,
}


def categories_for(is_income: bool) -> List[str]:
    """新增表单中按收支类型提供的分类列表"""
    return list(INCOME_CATEGORIES if is_income else EXPENSE_CATEGORIES)


def filter_categories() -> List[str]:
    """筛选面板的分类列表（含 All）"""
    return [ALL_CATEGORIES] + INCOME_CATEGORIES + EXPENSE_CATEGORIES


# ==================== 工具函数 ====================
def format_money(amount: float) -> str:
    """统一的金额格式化函数，返回货币格式（如 $1,234.56）"""
    if amount < 0:
        return f"-{CURRENCY_SYMBOL}{abs(amount):,.2f}"
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def format_signed_money(amount: float, is_income: bool) -> str:
    """带收支符号的金额（如 +$12.00 / -$3.50）"""
    sign = "+" if is_income else "-"
    return f"{sign}{CURRENCY_SYMBOL}{amount:,.2f}"
