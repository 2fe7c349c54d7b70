"""Dashboard snapshot for the current calendar month."""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..ledger.records import BudgetRecord, DashboardStats, to_decimal
from ..ledger.repository import LedgerRepository
from .engine import check_owner, month_window, monthly_total

logger = logging.getLogger(__name__)


def select_overall_budget(budgets: Sequence[BudgetRecord]) -> Optional[BudgetRecord]:
    """First overall budget in retrieval order, or None."""
    overall = [b for b in budgets if b.is_overall]
    if len(overall) > 1:
        logger.warning(
            "Owner %s has %d overall budgets, using budget %s",
            overall[0].owner_id, len(overall), overall[0].id,
        )
    return overall[0] if overall else None


def summarize_dashboard(
    repository: LedgerRepository,
    owner_id: int,
    default_budget_amount,
    today: Optional[date] = None,
) -> DashboardStats:
    """Combine this month's spending with the owner's budget, categories and savings goals.

    ``default_budget_amount`` is the baseline when no overall budget exists.
    Repository failures propagate unchanged; no partial snapshot is returned.
    """
    check_owner(owner_id)
    default_budget_amount = to_decimal(default_budget_amount, "default budget amount")
    today = today or date.today()

    window = month_window(today.year, today.month)
    expenses = repository.list_expenses(owner_id, window)
    total = monthly_total(expenses, owner_id, today.year, today.month)

    overall = select_overall_budget(repository.list_budgets(owner_id))
    budget_amount = overall.amount if overall is not None else default_budget_amount

    categories = repository.list_categories(owner_id)
    categories_count = sum(1 for c in categories if c.visible_to(owner_id))

    goals = repository.list_savings_goals(owner_id)
    # A goal without a current amount has saved nothing yet
    savings = sum((g.current_amount for g in goals if g.current_amount is not None), Decimal("0"))

    return DashboardStats(
        monthly_total=total,
        budget_remaining=budget_amount - total,
        categories_count=categories_count,
        savings_progress=savings,
        budget_amount=budget_amount,
    )
