"""Request helpers shared by the JSON blueprints."""
from datetime import datetime, time
from decimal import Decimal, InvalidOperation

from flask import current_app, request
from flask_login import current_user

from ..errors import InvalidArgument
from ..extensions import db
from ..ledger import SqlLedgerRepository, to_decimal
from ..models import Category

_CENT = Decimal("0.01")
_MAX_INTEGER_DIGITS = 8


def ledger():
    """Repository bound to this request's database session."""
    return SqlLedgerRepository(db.session)


def owner_id() -> int:
    return int(current_user.id)


def strict_categories() -> bool:
    return bool(current_app.config.get("STRICT_CATEGORY_RESOLUTION", True))


def visible_category(category_id):
    """The category row if the current owner may file records under it."""
    cat = db.session.get(Category, category_id)
    if cat is None or (cat.user_id is not None and cat.user_id != owner_id()):
        raise InvalidArgument(f"Category {category_id} does not exist")
    return cat


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgument("Request body must be a JSON object")
    return data


def parse_int(raw, name: str, required: bool = True, default=None) -> int:
    if raw is None or raw == "":
        if required:
            raise InvalidArgument(f"{name} is required")
        return default
    if isinstance(raw, bool):
        raise InvalidArgument(f"{name} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be an integer, got {raw!r}")


def parse_amount(raw, name: str = "amount", required: bool = True, allow_zero: bool = False):
    if raw is None or raw == "":
        if required:
            raise InvalidArgument(f"{name} is required")
        return None
    # JSON numbers arrive as floats; their shortest repr is the text the client sent
    if isinstance(raw, float):
        raw = repr(raw)
    amount = to_decimal(raw, name)
    # Numeric(10, 2) columns hold at most eight integer digits
    if amount.adjusted() >= _MAX_INTEGER_DIGITS:
        raise InvalidArgument(f"{name} is too large: {raw!r}")
    try:
        cents = amount.quantize(_CENT)
    except InvalidOperation:
        raise InvalidArgument(f"{name} is not a valid amount: {raw!r}")
    if amount != cents:
        raise InvalidArgument(f"{name} has more than two decimal places")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidArgument(f"{name} must be greater than zero")
    return cents


def parse_datetime(raw, name: str, required: bool = True, end_of_day: bool = False):
    """Parse an ISO-8601 date or timestamp into a naive local datetime.

    With ``end_of_day`` a date-only value means the last instant of that day.
    """
    if raw is None or raw == "":
        if required:
            raise InvalidArgument(f"{name} is required")
        return None
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidArgument(f"{name} is not an ISO-8601 date: {raw!r}")
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    if end_of_day and len(text) == 10:
        value = datetime.combine(value.date(), time.max)
    return value


def parse_bool(raw, default: bool = False) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes", "on")
