from .engine import (
    DEFAULT_MONTHS_BACK,
    MONTH_LABELS,
    budget_status,
    budget_window,
    check_date_range,
    category_totals,
    month_window,
    monthly_total,
    monthly_trends,
    trend_window,
)
from .summary import select_overall_budget, summarize_dashboard

__all__ = [
    "DEFAULT_MONTHS_BACK",
    "MONTH_LABELS",
    "budget_status",
    "budget_window",
    "check_date_range",
    "category_totals",
    "month_window",
    "monthly_total",
    "monthly_trends",
    "trend_window",
    "select_overall_budget",
    "summarize_dashboard",
]
