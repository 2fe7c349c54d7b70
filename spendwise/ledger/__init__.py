from .records import (
    BudgetRecord,
    BudgetUsage,
    CategoryRecord,
    CategoryTotal,
    DashboardStats,
    ExpenseRecord,
    MonthlyTrendPoint,
    SavingsGoalRecord,
    to_decimal,
)
from .repository import InMemoryLedgerRepository, LedgerRepository, SqlLedgerRepository

__all__ = [
    "BudgetRecord",
    "BudgetUsage",
    "CategoryRecord",
    "CategoryTotal",
    "DashboardStats",
    "ExpenseRecord",
    "MonthlyTrendPoint",
    "SavingsGoalRecord",
    "to_decimal",
    "InMemoryLedgerRepository",
    "LedgerRepository",
    "SqlLedgerRepository",
]
