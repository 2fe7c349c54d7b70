from flask import Blueprint, jsonify
from flask_login import login_required
from sqlalchemy import or_
from ...errors import InvalidArgument
from ...extensions import db
from ...ledger.repository import category_record
from ...models import Category
from ..common import json_body, ledger, owner_id

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.route("", methods=["GET"])
@login_required
def list_categories():
    return jsonify([c.as_dict() for c in ledger().list_categories(owner_id())])


@categories_bp.route("", methods=["POST"])
@login_required
def create_category():
    data = json_body()
    name = (data.get("name") or "").strip()
    if not name:
        raise InvalidArgument("name is required")
    # prevent duplicates against the owner's own and the shared defaults
    exists = Category.query.filter(
        or_(Category.user_id == owner_id(), Category.user_id.is_(None)),
        db.func.lower(Category.name) == name.lower(),
    ).first()
    if exists:
        return jsonify({"error": "conflict", "message": "Category name already exists"}), 409
    cat = Category(
        user_id=owner_id(),
        name=name,
        icon=data.get("icon") or "🏷️",
        color=data.get("color") or "#607D8B",
        is_custom=True,
    )
    db.session.add(cat)
    db.session.commit()
    return jsonify(category_record(cat).as_dict()), 201
