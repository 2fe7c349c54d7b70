"""
Read contract the analytics layer consumes, plus its implementations.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from ..errors import CollaboratorUnavailable
from ..models import Budget, Category, Expense, SavingsGoal
from .records import BudgetRecord, CategoryRecord, ExpenseRecord, SavingsGoalRecord

logger = logging.getLogger(__name__)

DateRange = Tuple[datetime, datetime]


class LedgerRepository(ABC):
    """
    Owner-scoped reads over the ledger.

    Every method returns records belonging to (or, for categories, visible to)
    ``owner_id`` only. Failures surface as ``CollaboratorUnavailable``.
    """

    @abstractmethod
    def list_expenses(self, owner_id: int, date_range: Optional[DateRange] = None) -> Sequence[ExpenseRecord]:
        """
        Get the owner's expenses.

        Args:
            owner_id: Owning user id
            date_range: Optional inclusive ``(start, end)`` bounds on the expense date

        Returns:
            Expense records, newest first
        """
        pass

    @abstractmethod
    def list_categories(self, owner_id: int) -> Sequence[CategoryRecord]:
        """System-default categories plus the ones the owner created."""
        pass

    @abstractmethod
    def list_budgets(self, owner_id: int) -> Sequence[BudgetRecord]:
        """Budgets in retrieval order (oldest first)."""
        pass

    @abstractmethod
    def list_savings_goals(self, owner_id: int) -> Sequence[SavingsGoalRecord]:
        pass


def expense_record(row: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=row.id,
        owner_id=row.user_id,
        category_id=row.category_id,
        amount=row.amount,
        date=row.spent_on,
        payment_mode=row.payment_mode,
        is_recurring=bool(row.is_recurring),
        notes=row.note,
        description=row.description or "",
    )


def category_record(row: Category) -> CategoryRecord:
    return CategoryRecord(
        id=row.id,
        name=row.name,
        icon=row.icon or "",
        color=row.color or "",
        owner_id=row.user_id,
        is_custom=bool(row.is_custom),
    )


def budget_record(row: Budget) -> BudgetRecord:
    return BudgetRecord(
        id=row.id,
        owner_id=row.user_id,
        amount=row.amount,
        period=row.period,
        category_id=row.category_id,
        is_overall=bool(row.is_overall),
    )


def savings_goal_record(row: SavingsGoal) -> SavingsGoalRecord:
    return SavingsGoalRecord(
        id=row.id,
        owner_id=row.user_id,
        name=row.name,
        target_amount=row.target_amount,
        current_amount=row.current_amount,
        target_date=row.target_date,
    )


class SqlLedgerRepository(LedgerRepository):
    """Reads through a (Flask-)SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def _fetch(self, collaborator: str, query) -> list:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            raise CollaboratorUnavailable(collaborator, str(exc)) from exc

    def list_expenses(self, owner_id, date_range=None):
        q = self.session.query(Expense).filter(Expense.user_id == owner_id)
        if date_range is not None:
            start, end = date_range
            q = q.filter(Expense.spent_on.between(start, end))
        rows = self._fetch("expenses", q.order_by(Expense.spent_on.desc(), Expense.id.desc()))
        logger.debug("Loaded %d expenses for owner %s", len(rows), owner_id)
        return [expense_record(r) for r in rows]

    def list_categories(self, owner_id):
        q = self.session.query(Category).filter(
            or_(Category.user_id == owner_id, Category.user_id.is_(None))
        ).order_by(Category.id)
        return [category_record(r) for r in self._fetch("categories", q)]

    def list_budgets(self, owner_id):
        q = self.session.query(Budget).filter(Budget.user_id == owner_id).order_by(Budget.id)
        return [budget_record(r) for r in self._fetch("budgets", q)]

    def list_savings_goals(self, owner_id):
        q = self.session.query(SavingsGoal).filter(SavingsGoal.user_id == owner_id).order_by(SavingsGoal.id)
        return [savings_goal_record(r) for r in self._fetch("savings goals", q)]


class InMemoryLedgerRepository(LedgerRepository):
    """Holds records in plain lists; used for fixtures and demos."""

    def __init__(self, expenses=(), categories=(), budgets=(), savings_goals=()):
        self.expenses: List[ExpenseRecord] = list(expenses)
        self.categories: List[CategoryRecord] = list(categories)
        self.budgets: List[BudgetRecord] = list(budgets)
        self.savings_goals: List[SavingsGoalRecord] = list(savings_goals)

    def list_expenses(self, owner_id, date_range=None):
        rows = [e for e in self.expenses if e.owner_id == owner_id]
        if date_range is not None:
            start, end = date_range
            rows = [e for e in rows if start <= e.date <= end]
        return sorted(rows, key=lambda e: (e.date, e.id), reverse=True)

    def list_categories(self, owner_id):
        return [c for c in self.categories if c.visible_to(owner_id)]

    def list_budgets(self, owner_id):
        return [b for b in self.budgets if b.owner_id == owner_id]

    def list_savings_goals(self, owner_id):
        return [g for g in self.savings_goals if g.owner_id == owner_id]
