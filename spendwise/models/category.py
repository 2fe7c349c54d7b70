from ..extensions import db


class Category(db.Model):
    __tablename__ = "categories"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)  # NULL = shared system default
    name = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(16), nullable=False, default="")
    color = db.Column(db.String(16), nullable=False, default="#607D8B")
    is_custom = db.Column(db.Boolean, nullable=False, default=False)

    expenses = db.relationship("Expense", backref="category", lazy=True)

    __table_args__ = (
        db.UniqueConstraint("user_id", "name", name="uq_user_category_name"),
    )
