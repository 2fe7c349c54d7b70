from datetime import datetime
from decimal import Decimal
from ..extensions import db


class SavingsGoal(db.Model):
    __tablename__ = "savings_goals"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    target_amount = db.Column(db.Numeric(10, 2, asdecimal=True), nullable=False)
    current_amount = db.Column(db.Numeric(10, 2, asdecimal=True), default=Decimal("0"))
    target_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
