from flask import Blueprint, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from ...errors import InvalidArgument
from ...extensions import db, login_manager
from ...models import User
from ..common import json_body

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _user_dict(user):
    return {"id": user.id, "name": user.name, "email": user.email}


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": "unauthorized", "message": "Login required"}), 401


@auth_bp.route("/register", methods=["POST"])
def register():
    data = json_body()
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")
    if not all([name, email, password]):
        raise InvalidArgument("name, email and password are required")
    if User.query.filter_by(email=email).first():
        return jsonify({"error": "conflict", "message": "Email already registered"}), 409
    user = User(name=name, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return jsonify(_user_dict(user)), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    user = User.query.filter_by(email=email).first()
    if user and user.check_password(password):
        login_user(user)
        return jsonify(_user_dict(user))
    return jsonify({"error": "unauthorized", "message": "Invalid credentials"}), 401


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"message": "Logged out"})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify(_user_dict(current_user))
