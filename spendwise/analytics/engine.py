"""Pure aggregations over a collection of expense records.

Nothing here does I/O or mutates its inputs: every function takes the records it
needs and returns new derived records. Amounts are summed as ``Decimal``.
"""
import calendar
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import DataIntegrityFault, InvalidArgument, UnresolvedCategory
from ..ledger.records import (
    BudgetRecord,
    BudgetUsage,
    CategoryRecord,
    CategoryTotal,
    ExpenseRecord,
    MonthlyTrendPoint,
)

logger = logging.getLogger(__name__)

DEFAULT_MONTHS_BACK = 6
UNKNOWN_CATEGORY = "Unknown"
OVERALL_BUDGET = "Overall"
NEAR_LIMIT_RATIO = Decimal("0.9")

# Fixed English labels so the trend series does not depend on the process locale
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_ZERO = Decimal("0")
_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")


def check_owner(owner_id) -> None:
    if isinstance(owner_id, bool) or not isinstance(owner_id, int):
        raise InvalidArgument(f"owner id must be an integer, got {owner_id!r}")


def _check_year_month(year, month) -> None:
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise InvalidArgument(f"year must be a 4-digit integer, got {year!r}")
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidArgument(f"month must be an integer from 1 to 12, got {month!r}")


def _as_datetime(value, name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise InvalidArgument(f"{name} must be a date or datetime, got {value!r}")


def check_date_range(start, end) -> Tuple[datetime, datetime]:
    start = _as_datetime(start, "start date")
    end = _as_datetime(end, "end date")
    if end < start:
        raise InvalidArgument(f"end date {end.isoformat()} is before start date {start.isoformat()}")
    return start, end


def month_window(year: int, month: int) -> Tuple[datetime, datetime]:
    """Inclusive bounds of a calendar month: the 1st at 00:00 to the last day at 23:59:59.999999."""
    _check_year_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime.combine(date(year, month, last_day), time.max)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    y, m = divmod(year * 12 + (month - 1) + delta, 12)
    return y, m + 1


def _in_window(records: Iterable[ExpenseRecord], owner_id: int, start: datetime, end: datetime):
    for r in records:
        if r.owner_id == owner_id and start <= r.date <= end:
            yield r


def _sum(records: Iterable[ExpenseRecord]) -> Decimal:
    return sum((r.amount for r in records), _ZERO)


def visible_category_names(categories: Iterable[CategoryRecord], owner_id: int) -> Dict[int, str]:
    return {c.id: c.name for c in categories if c.visible_to(owner_id)}


def resolve_category_name(names: Dict[int, str], category_id, owner_id: int, strict: bool = True) -> str:
    if category_id in names:
        return names[category_id]
    if strict:
        raise UnresolvedCategory(category_id, owner_id)
    logger.warning("Category %s not visible to owner %s, labelling it %r", category_id, owner_id, UNKNOWN_CATEGORY)
    return UNKNOWN_CATEGORY


def monthly_total(records: Iterable[ExpenseRecord], owner_id: int, year: int, month: int) -> Decimal:
    check_owner(owner_id)
    start, end = month_window(year, month)
    total = _sum(_in_window(records, owner_id, start, end))
    logger.debug("Monthly total for owner %s %04d-%02d: %s", owner_id, year, month, total)
    return total


def category_totals(
    records: Iterable[ExpenseRecord],
    categories: Iterable[CategoryRecord],
    owner_id: int,
    start,
    end,
    strict: bool = True,
) -> List[CategoryTotal]:
    """Sum expenses per category between ``start`` and ``end`` (both inclusive).

    Rows come back largest total first, ties broken by category id. A category the
    owner cannot see raises ``UnresolvedCategory`` unless ``strict`` is off, in
    which case the row is labelled "Unknown".
    """
    check_owner(owner_id)
    start, end = check_date_range(start, end)

    totals: Dict[int, Decimal] = defaultdict(Decimal)
    for r in _in_window(records, owner_id, start, end):
        totals[r.category_id] += r.amount

    names = visible_category_names(categories, owner_id)
    rows = [
        CategoryTotal(category_id=cid, category_name=resolve_category_name(names, cid, owner_id, strict), total=total)
        for cid, total in totals.items()
    ]
    rows.sort(key=lambda row: (-row.total, row.category_id))
    return rows


def _check_months_back(months_back) -> None:
    if isinstance(months_back, bool) or not isinstance(months_back, int) or months_back <= 0:
        raise InvalidArgument(f"months back must be a positive integer, got {months_back!r}")


def trend_window(months_back: int = DEFAULT_MONTHS_BACK, today: Optional[date] = None) -> Tuple[datetime, datetime]:
    """Bounds covering every month a ``monthly_trends`` call would report on."""
    _check_months_back(months_back)
    today = today or date.today()
    first_year, first_month = shift_month(today.year, today.month, -(months_back - 1))
    return month_window(first_year, first_month)[0], month_window(today.year, today.month)[1]


def monthly_trends(
    records: Iterable[ExpenseRecord],
    owner_id: int,
    months_back: int = DEFAULT_MONTHS_BACK,
    today: Optional[date] = None,
) -> List[MonthlyTrendPoint]:
    """One point per month for the last ``months_back`` months, oldest first, ending with the current month."""
    check_owner(owner_id)
    _check_months_back(months_back)
    today = today or date.today()
    records = tuple(records)

    points = []
    for offset in range(months_back - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        points.append(
            MonthlyTrendPoint(
                month_label=MONTH_LABELS[month - 1],
                total=monthly_total(records, owner_id, year, month),
                year=year,
                month=month,
            )
        )
    return points


def period_window(budget: BudgetRecord, today: date) -> Tuple[datetime, datetime]:
    if budget.period == "monthly":
        return month_window(today.year, today.month)
    if budget.period == "weekly":
        monday = today - timedelta(days=today.weekday())
        return datetime.combine(monday, time.min), datetime.combine(monday + timedelta(days=6), time.max)
    if budget.period == "daily":
        return datetime.combine(today, time.min), datetime.combine(today, time.max)
    raise DataIntegrityFault(f"Budget {budget.id} has unknown period {budget.period!r}")


def budget_window(today: date) -> Tuple[datetime, datetime]:
    """Smallest range holding the current month, week and day."""
    month_start, month_end = month_window(today.year, today.month)
    monday = today - timedelta(days=today.weekday())
    week_start = datetime.combine(monday, time.min)
    week_end = datetime.combine(monday + timedelta(days=6), time.max)
    return min(month_start, week_start), max(month_end, week_end)


def _usage_status(spent: Decimal, amount: Decimal) -> str:
    if spent > amount:
        return "over"
    if amount > 0 and spent >= amount * NEAR_LIMIT_RATIO:
        return "near"
    return "ok"


def _usage_percentage(spent: Decimal, amount: Decimal) -> Decimal:
    if amount <= 0:
        return _HUNDRED.quantize(_CENT) if spent > 0 else _ZERO.quantize(_CENT)
    return min(spent / amount * _HUNDRED, _HUNDRED).quantize(_CENT)


def budget_status(
    records: Iterable[ExpenseRecord],
    budgets: Sequence[BudgetRecord],
    categories: Iterable[CategoryRecord],
    owner_id: int,
    today: Optional[date] = None,
    strict: bool = True,
) -> List[BudgetUsage]:
    """Spending against each of the owner's budgets for the period containing ``today``."""
    check_owner(owner_id)
    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()
    records = tuple(records)
    names = visible_category_names(categories, owner_id)

    usage = []
    for budget in budgets:
        if budget.owner_id != owner_id:
            continue
        start, end = period_window(budget, today)
        in_period = _in_window(records, owner_id, start, end)
        if budget.is_overall or budget.category_id is None:
            name = OVERALL_BUDGET
        else:
            name = resolve_category_name(names, budget.category_id, owner_id, strict)
            in_period = (r for r in in_period if r.category_id == budget.category_id)
        spent = _sum(in_period)
        usage.append(
            BudgetUsage(
                budget_id=budget.id,
                category_id=budget.category_id,
                category_name=name,
                period=budget.period,
                amount=budget.amount,
                spent=spent,
                remaining=budget.amount - spent,
                percentage=_usage_percentage(spent, budget.amount),
                status=_usage_status(spent, budget.amount),
            )
        )
    return usage
