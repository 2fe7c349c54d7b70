"""Immutable record types exchanged between the repository, the analytics
engine and the HTTP layer.

Amounts are always ``Decimal``. Constructors accept ``Decimal``, ``int`` or a
decimal string and reject binary floats.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..errors import InvalidArgument


def to_decimal(value, field: str = "amount") -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidArgument(f"{field} must be an exact decimal, got {type(value).__name__}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidArgument(f"{field} is not a decimal number: {value!r}")
        if not parsed.is_finite():
            raise InvalidArgument(f"{field} must be finite: {value!r}")
        return parsed
    raise InvalidArgument(f"{field} must be an exact decimal, got {type(value).__name__}")


def _coerce(record, field: str, optional: bool = False):
    value = getattr(record, field)
    if value is None and optional:
        return
    object.__setattr__(record, field, to_decimal(value, field))


def _money(value: Decimal) -> str:
    return str(value)


@dataclass(frozen=True)
class ExpenseRecord:
    id: int
    owner_id: int
    category_id: int
    amount: Decimal
    date: datetime
    payment_mode: str = "cash"
    is_recurring: bool = False
    notes: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        _coerce(self, "amount")
        if not isinstance(self.date, datetime):
            if isinstance(self.date, date):
                object.__setattr__(self, "date", datetime.combine(self.date, datetime.min.time()))
            else:
                raise InvalidArgument(f"Expense {self.id} has no valid date")

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "categoryId": self.category_id,
            "amount": _money(self.amount),
            "description": self.description,
            "paymentMode": self.payment_mode,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "isRecurring": self.is_recurring,
        }


@dataclass(frozen=True)
class CategoryRecord:
    id: int
    name: str
    icon: str = ""
    color: str = ""
    owner_id: Optional[int] = None  # None = shared system default
    is_custom: bool = False

    def visible_to(self, owner_id: int) -> bool:
        return self.owner_id is None or self.owner_id == owner_id

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "isCustom": self.is_custom,
            "userId": self.owner_id,
        }


@dataclass(frozen=True)
class BudgetRecord:
    id: int
    owner_id: int
    amount: Decimal
    period: str = "monthly"
    category_id: Optional[int] = None
    is_overall: bool = False

    def __post_init__(self):
        _coerce(self, "amount")

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "categoryId": self.category_id,
            "amount": _money(self.amount),
            "period": self.period,
            "isOverall": self.is_overall,
        }


@dataclass(frozen=True)
class SavingsGoalRecord:
    id: int
    owner_id: int
    name: str
    target_amount: Decimal
    current_amount: Optional[Decimal] = Decimal("0")
    target_date: Optional[datetime] = None

    def __post_init__(self):
        _coerce(self, "target_amount")
        _coerce(self, "current_amount", optional=True)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "name": self.name,
            "targetAmount": _money(self.target_amount),
            "currentAmount": _money(self.current_amount) if self.current_amount is not None else None,
            "targetDate": self.target_date.isoformat() if self.target_date else None,
        }


# Derived records

@dataclass(frozen=True)
class CategoryTotal:
    category_id: int
    category_name: str
    total: Decimal

    def as_dict(self) -> dict:
        return {"categoryId": self.category_id, "categoryName": self.category_name, "total": _money(self.total)}


@dataclass(frozen=True)
class MonthlyTrendPoint:
    month_label: str
    total: Decimal
    year: int
    month: int

    def as_dict(self) -> dict:
        return {"month": self.month_label, "year": self.year, "monthNumber": self.month, "total": _money(self.total)}


@dataclass(frozen=True)
class BudgetUsage:
    budget_id: int
    category_id: Optional[int]
    category_name: str
    period: str
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    status: str  # ok / near / over

    def as_dict(self) -> dict:
        return {
            "budgetId": self.budget_id,
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "period": self.period,
            "amount": _money(self.amount),
            "spent": _money(self.spent),
            "remaining": _money(self.remaining),
            "percentage": _money(self.percentage),
            "status": self.status,
        }


@dataclass(frozen=True)
class DashboardStats:
    monthly_total: Decimal
    budget_remaining: Decimal
    categories_count: int
    savings_progress: Decimal
    budget_amount: Decimal

    def as_dict(self) -> dict:
        return {
            "monthlyTotal": _money(self.monthly_total),
            "budgetRemaining": _money(self.budget_remaining),
            "categoriesCount": self.categories_count,
            "savingsProgress": _money(self.savings_progress),
            "budgetAmount": _money(self.budget_amount),
        }
