from datetime import date

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required

from ...analytics import category_totals, check_date_range, month_window, monthly_total, monthly_trends, trend_window
from ..common import ledger, owner_id, parse_datetime, parse_int, strict_categories

analytics_bp = Blueprint("analytics", __name__, url_prefix="/api/analytics")


@analytics_bp.route("/monthly-total")
@login_required
def get_monthly_total():
    year = parse_int(request.args.get("year"), "year")
    month = parse_int(request.args.get("month"), "month")
    window = month_window(year, month)
    records = ledger().list_expenses(owner_id(), window)
    return jsonify({"total": str(monthly_total(records, owner_id(), year, month))})


@analytics_bp.route("/category-totals")
@login_required
def get_category_totals():
    start = parse_datetime(request.args.get("startDate"), "startDate")
    end = parse_datetime(request.args.get("endDate"), "endDate", end_of_day=True)
    start, end = check_date_range(start, end)
    repo = ledger()
    rows = category_totals(
        repo.list_expenses(owner_id(), (start, end)),
        repo.list_categories(owner_id()),
        owner_id(),
        start,
        end,
        strict=strict_categories(),
    )
    return jsonify([row.as_dict() for row in rows])


@analytics_bp.route("/monthly-trends")
@login_required
def get_monthly_trends():
    months = parse_int(
        request.args.get("months"), "months", required=False,
        default=current_app.config.get("DEFAULT_TREND_MONTHS", 6),
    )
    today = date.today()
    records = ledger().list_expenses(owner_id(), trend_window(months, today=today))
    return jsonify([point.as_dict() for point in monthly_trends(records, owner_id(), months, today=today)])
