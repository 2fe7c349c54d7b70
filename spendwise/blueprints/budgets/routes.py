from datetime import date
from flask import Blueprint, jsonify
from flask_login import login_required
from ...analytics import budget_status, budget_window
from ...errors import InvalidArgument
from ...extensions import db
from ...ledger.repository import budget_record
from ...models import Budget, BUDGET_PERIODS
from ..common import json_body, ledger, owner_id, parse_amount, parse_bool, parse_int, strict_categories, visible_category

budgets_bp = Blueprint("budgets", __name__, url_prefix="/api/budgets")


@budgets_bp.route("", methods=["GET"])
@login_required
def list_budgets():
    repo = ledger()
    cats = {c.id: c.as_dict() for c in repo.list_categories(owner_id())}
    rows = []
    for b in repo.list_budgets(owner_id()):
        row = b.as_dict()
        row["category"] = cats.get(b.category_id) if b.category_id is not None else None
        rows.append(row)
    return jsonify(rows)


@budgets_bp.route("", methods=["POST"])
@login_required
def save_budget():
    data = json_body()
    amount = parse_amount(data.get("amount"))
    period = (data.get("period") or "monthly").strip().lower()
    if period not in BUDGET_PERIODS:
        raise InvalidArgument(f"period must be one of {', '.join(BUDGET_PERIODS)}")
    is_overall = parse_bool(data.get("isOverall"))
    category_id = parse_int(data.get("categoryId"), "categoryId", required=False)
    if is_overall and category_id is not None:
        raise InvalidArgument("an overall budget cannot have a category")
    if not is_overall and category_id is None:
        raise InvalidArgument("categoryId is required for a category budget")
    if category_id is not None:
        category_id = visible_category(category_id).id

    # One overall budget per owner: saving again updates it
    if is_overall:
        b = Budget.query.filter_by(user_id=owner_id(), is_overall=True).order_by(Budget.id).first()
    else:
        b = Budget.query.filter_by(user_id=owner_id(), category_id=category_id, period=period).first()
    if b:
        b.amount = amount
        b.period = period
        status = 200
    else:
        b = Budget(user_id=owner_id(), category_id=category_id, amount=amount, period=period, is_overall=is_overall)
        db.session.add(b)
        status = 201
    db.session.commit()
    return jsonify(budget_record(b).as_dict()), status


@budgets_bp.route("/status", methods=["GET"])
@login_required
def status():
    today = date.today()
    repo = ledger()
    usage = budget_status(
        repo.list_expenses(owner_id(), budget_window(today)),
        repo.list_budgets(owner_id()),
        repo.list_categories(owner_id()),
        owner_id(),
        today=today,
        strict=strict_categories(),
    )
    return jsonify([u.as_dict() for u in usage])
