from .user import User
from .category import Category
from .expense import Expense
from .budget import Budget, BUDGET_PERIODS
from .savings_goal import SavingsGoal

__all__ = ["User", "Category", "Expense", "Budget", "BUDGET_PERIODS", "SavingsGoal"]
