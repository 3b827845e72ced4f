"""异常定义"""


class ExpenseTrackerError(Exception):
    """应用异常基类"""


class BackendUnavailable(ExpenseTrackerError, RuntimeError):
    """当前平台无法使用持久化存储（由 open_store 自动回退到内存存储）"""


class ValidationError(ExpenseTrackerError, ValueError):
    """输入数据不合法：标题为空、金额非正数或无法解析等"""
