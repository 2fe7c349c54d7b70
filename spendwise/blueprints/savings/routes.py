from decimal import Decimal
from flask import Blueprint, jsonify
from flask_login import login_required
from ...errors import InvalidArgument
from ...extensions import db
from ...ledger.repository import savings_goal_record
from ...models import SavingsGoal
from ..common import json_body, ledger, owner_id, parse_amount, parse_datetime

savings_bp = Blueprint("savings", __name__, url_prefix="/api/savings-goals")


@savings_bp.route("", methods=["GET"])
@login_required
def list_goals():
    return jsonify([g.as_dict() for g in ledger().list_savings_goals(owner_id())])


@savings_bp.route("", methods=["POST"])
@login_required
def create_goal():
    data = json_body()
    name = (data.get("name") or "").strip()
    if not name:
        raise InvalidArgument("name is required")
    goal = SavingsGoal(
        user_id=owner_id(),
        name=name,
        target_amount=parse_amount(data.get("targetAmount"), "targetAmount"),
        current_amount=parse_amount(data.get("currentAmount"), "currentAmount", required=False, allow_zero=True)
        or Decimal("0"),
        target_date=parse_datetime(data.get("targetDate"), "targetDate", required=False),
    )
    db.session.add(goal)
    db.session.commit()
    return jsonify(savings_goal_record(goal).as_dict()), 201
