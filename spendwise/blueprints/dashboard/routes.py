from datetime import datetime
from decimal import Decimal
from flask import Blueprint, current_app, jsonify
from flask_login import login_required
from ...analytics import summarize_dashboard
from ...extensions import db
from ...models import Budget, Category, Expense, SavingsGoal
from ..common import ledger, owner_id

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("/stats")
@login_required
def stats():
    snapshot = summarize_dashboard(
        ledger(),
        owner_id(),
        default_budget_amount=current_app.config["DEFAULT_BUDGET_AMOUNT"],
    )
    return jsonify(snapshot.as_dict())


@dashboard_bp.route("/seed", methods=["POST"])
@login_required
def seed_demo():
    """Seed sample expenses, an overall budget and a savings goal for demo purposes."""
    now = datetime.now()
    uid = owner_id()
    cats = {c.name: c for c in Category.query.filter(Category.user_id.is_(None)).all()}

    if not Budget.query.filter_by(user_id=uid, is_overall=True).first():
        db.session.add(Budget(user_id=uid, amount=Decimal("3000.00"), period="monthly", is_overall=True))

    if not Expense.query.filter_by(user_id=uid).first():
        demo = [
            ("Lunch", "Food & Drinks", "12.50", "card"),
            ("Cab", "Transportation", "18.20", "cash"),
            ("Electricity bill", "Utilities", "96.00", "card"),
            ("Shoes", "Shopping", "74.99", "card"),
        ]
        for description, cat_name, amount, mode in demo:
            if cat_name not in cats:
                continue
            db.session.add(Expense(user_id=uid, description=description, category_id=cats[cat_name].id,
                                   amount=Decimal(amount), payment_mode=mode, spent_on=now))

    if not SavingsGoal.query.filter_by(user_id=uid).first():
        db.session.add(SavingsGoal(user_id=uid, name="Emergency fund", target_amount=Decimal("1000.00"),
                                   current_amount=Decimal("250.00")))

    db.session.commit()
    current_app.logger.info("Demo data seeded for owner %s", uid)
    return jsonify({"message": "Demo data seeded"})
