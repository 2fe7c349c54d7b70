from ..extensions import db

BUDGET_PERIODS = ("monthly", "weekly", "daily")


class Budget(db.Model):
    __tablename__ = "budgets"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)  # NULL for overall
    amount = db.Column(db.Numeric(10, 2, asdecimal=True), nullable=False)
    period = db.Column(db.String(10), nullable=False, default="monthly")
    is_overall = db.Column(db.Boolean, nullable=False, default=False)
