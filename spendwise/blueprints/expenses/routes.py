import logging
from datetime import datetime
from flask import Blueprint, jsonify, request
from flask_login import login_required
from ...analytics import check_date_range
from ...errors import NotFound
from ...extensions import db
from ...ledger.repository import expense_record
from ...models import Expense
from ..common import (
    json_body,
    ledger,
    owner_id,
    parse_amount,
    parse_bool,
    parse_datetime,
    parse_int,
    visible_category,
)

logger = logging.getLogger(__name__)

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


def _with_categories(records):
    repo = ledger()
    cats = {c.id: c.as_dict() for c in repo.list_categories(owner_id())}
    rows = []
    for r in records:
        row = r.as_dict()
        row["category"] = cats.get(r.category_id)
        rows.append(row)
    return rows


def _owned_expense(expense_id):
    exp = Expense.query.filter_by(id=expense_id, user_id=owner_id()).first()
    if exp is None:
        raise NotFound(f"Expense {expense_id} not found")
    return exp


@expenses_bp.route("", methods=["GET"])
@login_required
def list_expenses():
    limit = parse_int(request.args.get("limit"), "limit", required=False)
    records = ledger().list_expenses(owner_id())
    if limit is not None and limit > 0:
        records = records[:limit]
    return jsonify(_with_categories(records))


@expenses_bp.route("/date-range", methods=["GET"])
@login_required
def list_expenses_in_range():
    start = parse_datetime(request.args.get("startDate"), "startDate")
    end = parse_datetime(request.args.get("endDate"), "endDate", end_of_day=True)
    start, end = check_date_range(start, end)
    return jsonify(_with_categories(ledger().list_expenses(owner_id(), (start, end))))


@expenses_bp.route("", methods=["POST"])
@login_required
def create_expense():
    data = json_body()
    amount = parse_amount(data.get("amount"))
    category = visible_category(parse_int(data.get("categoryId"), "categoryId"))
    spent_on = parse_datetime(data.get("date"), "date", required=False) or datetime.now()

    exp = Expense(
        user_id=owner_id(),
        description=(data.get("description") or "").strip(),
        category_id=category.id,
        amount=amount,
        payment_mode=(data.get("paymentMode") or "cash").strip(),
        spent_on=spent_on,
        note=data.get("notes"),
        is_recurring=parse_bool(data.get("isRecurring")),
    )
    db.session.add(exp)
    db.session.commit()
    logger.info("Expense %s recorded for owner %s", exp.id, exp.user_id)
    return jsonify(expense_record(exp).as_dict()), 201


@expenses_bp.route("/<int:expense_id>", methods=["PUT"])
@login_required
def update_expense(expense_id):
    exp = _owned_expense(expense_id)
    data = json_body()
    if "amount" in data:
        exp.amount = parse_amount(data.get("amount"))
    if "categoryId" in data:
        exp.category_id = visible_category(parse_int(data.get("categoryId"), "categoryId")).id
    if "date" in data:
        exp.spent_on = parse_datetime(data.get("date"), "date")
    if "description" in data:
        exp.description = (data.get("description") or "").strip()
    if "paymentMode" in data:
        exp.payment_mode = (data.get("paymentMode") or "cash").strip()
    if "notes" in data:
        exp.note = data.get("notes")
    if "isRecurring" in data:
        exp.is_recurring = parse_bool(data.get("isRecurring"))
    db.session.commit()
    return jsonify(expense_record(exp).as_dict())


@expenses_bp.route("/<int:expense_id>", methods=["DELETE"])
@login_required
def delete_expense(expense_id):
    exp = _owned_expense(expense_id)
    db.session.delete(exp)
    db.session.commit()
    return jsonify({"message": "Expense deleted successfully"})
