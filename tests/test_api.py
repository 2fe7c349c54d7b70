from datetime import date, datetime
from decimal import Decimal

from spendwise import create_app
from spendwise.analytics import MONTH_LABELS
from spendwise.config import TestingConfig
from spendwise.extensions import db
from spendwise.models import Category, Expense, User


def add_expense(client, amount, when, category_id=1, **extra):
    body = {"amount": amount, "categoryId": category_id, "date": when, "description": "test", "paymentMode": "card"}
    body.update(extra)
    resp = client.post("/api/expenses", json=body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_requires_login(client):
    resp = client.get("/api/dashboard/stats")

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


def test_register_twice_conflicts(client):
    body = {"name": "Asha", "email": "asha@example.com", "password": "pw"}
    assert client.post("/auth/register", json=body).status_code == 201
    assert client.post("/auth/register", json=body).status_code == 409


def test_login_with_wrong_password(client):
    client.post("/auth/register", json={"name": "Asha", "email": "asha@example.com", "password": "pw"})

    assert client.post("/auth/login", json={"email": "asha@example.com", "password": "nope"}).status_code == 401


def test_default_categories_are_listed(auth_client):
    cats = auth_client.get("/api/categories").get_json()

    assert len(cats) == 8
    assert {"name": "Food & Drinks", "icon": "🍕", "color": "#F44336"}.items() <= cats[0].items()


def test_create_category_and_reject_duplicate(auth_client):
    resp = auth_client.post("/api/categories", json={"name": "Pets", "icon": "🐶", "color": "#795548"})

    assert resp.status_code == 201
    assert resp.get_json()["isCustom"] is True
    assert auth_client.post("/api/categories", json={"name": "pets"}).status_code == 409
    assert auth_client.post("/api/categories", json={"name": "food & drinks"}).status_code == 409


def test_monthly_total_endpoint(auth_client):
    add_expense(auth_client, "10.50", "2024-03-05")
    add_expense(auth_client, "5.25", "2024-03-31T23:59:59.999")
    add_expense(auth_client, 100, "2024-04-01")

    march = auth_client.get("/api/analytics/monthly-total?year=2024&month=3")
    april = auth_client.get("/api/analytics/monthly-total?year=2024&month=4")

    assert march.status_code == 200
    assert Decimal(march.get_json()["total"]) == Decimal("15.75")
    assert Decimal(april.get_json()["total"]) == Decimal("100")


def test_monthly_total_rejects_bad_month(auth_client):
    for query in ("year=2024&month=13", "year=2024", "year=abc&month=3", "year=24&month=3"):
        resp = auth_client.get(f"/api/analytics/monthly-total?{query}")
        assert resp.status_code == 400, query
        assert resp.get_json()["error"] == "invalid_argument"


def test_category_totals_endpoint(auth_client):
    add_expense(auth_client, "20.00", "2024-03-01", category_id=2)
    add_expense(auth_client, "12.00", "2024-03-10", category_id=1)
    add_expense(auth_client, "13.00", "2024-03-31T18:45:00", category_id=1)
    add_expense(auth_client, "99.00", "2024-04-01", category_id=1)

    rows = auth_client.get("/api/analytics/category-totals?startDate=2024-03-01&endDate=2024-03-31").get_json()

    assert rows == [
        {"categoryId": 1, "categoryName": "Food & Drinks", "total": "25.00"},
        {"categoryId": 2, "categoryName": "Transportation", "total": "20.00"},
    ]


def test_category_totals_rejects_reversed_range(auth_client):
    resp = auth_client.get("/api/analytics/category-totals?startDate=2024-03-31&endDate=2024-03-01")

    assert resp.status_code == 400


def test_orphaned_category_is_reported(app, auth_client):
    with app.app_context():
        other = User(name="Bo", email="bo@example.com")
        other.set_password("pw")
        db.session.add(other)
        db.session.flush()
        secret = Category(user_id=other.id, name="Secret", is_custom=True)
        db.session.add(secret)
        db.session.flush()
        db.session.add(Expense(user_id=1, category_id=secret.id, amount=Decimal("5.00"), payment_mode="cash",
                               spent_on=datetime(2024, 3, 3)))
        db.session.commit()

    resp = auth_client.get("/api/analytics/category-totals?startDate=2024-03-01&endDate=2024-03-31")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "data_integrity"


def test_lenient_mode_labels_orphaned_category_unknown():
    class LenientConfig(TestingConfig):
        STRICT_CATEGORY_RESOLUTION = False

    app = create_app(LenientConfig)
    client = app.test_client()
    client.post("/auth/register", json={"name": "Asha", "email": "asha@example.com", "password": "pw"})
    client.post("/auth/login", json={"email": "asha@example.com", "password": "pw"})
    with app.app_context():
        db.session.add(Expense(user_id=1, category_id=404, amount=Decimal("5.00"), payment_mode="cash",
                               spent_on=datetime(2024, 3, 3)))
        db.session.commit()

    rows = client.get("/api/analytics/category-totals?startDate=2024-03-01&endDate=2024-03-31").get_json()

    assert rows == [{"categoryId": 404, "categoryName": "Unknown", "total": "5.00"}]


def test_monthly_trends_endpoint(auth_client):
    today = date.today()
    add_expense(auth_client, "42.00", datetime.now().isoformat())

    points = auth_client.get("/api/analytics/monthly-trends?months=3").get_json()
    default = auth_client.get("/api/analytics/monthly-trends").get_json()

    assert len(points) == 3
    assert len(default) == 6
    assert points[-1]["month"] == MONTH_LABELS[today.month - 1]
    assert points[-1]["monthNumber"] == today.month
    assert Decimal(points[-1]["total"]) == Decimal("42.00")


def test_monthly_trends_window_and_points_share_one_today(auth_client, monkeypatch):
    class FixedDate(date):
        @classmethod
        def today(cls):
            return cls(2024, 1, 31)

    monkeypatch.setattr("spendwise.blueprints.analytics.routes.date", FixedDate)
    add_expense(auth_client, "42.00", "2024-01-15")
    add_expense(auth_client, "8.00", "2023-12-31")

    points = auth_client.get("/api/analytics/monthly-trends?months=2").get_json()

    assert [(p["year"], p["monthNumber"], p["total"]) for p in points] == [(2023, 12, "8.00"), (2024, 1, "42.00")]


def test_monthly_trends_rejects_non_positive(auth_client):
    assert auth_client.get("/api/analytics/monthly-trends?months=0").status_code == 400
    assert auth_client.get("/api/analytics/monthly-trends?months=-2").status_code == 400


def test_dashboard_stats(auth_client):
    now = datetime.now().isoformat()
    add_expense(auth_client, "4000.00", now)
    add_expense(auth_client, "200.00", now, category_id=3)
    auth_client.post("/api/budgets", json={"amount": "5000", "period": "monthly", "isOverall": True})
    auth_client.post("/api/categories", json={"name": "Pets"})
    auth_client.post("/api/savings-goals", json={"name": "Trip", "targetAmount": "900", "currentAmount": "250.00"})
    auth_client.post("/api/savings-goals", json={"name": "Car", "targetAmount": "9000"})

    stats = auth_client.get("/api/dashboard/stats").get_json()

    assert Decimal(stats["monthlyTotal"]) == Decimal("4200")
    assert Decimal(stats["budgetAmount"]) == Decimal("5000")
    assert Decimal(stats["budgetRemaining"]) == Decimal("800")
    assert stats["categoriesCount"] == 9
    assert Decimal(stats["savingsProgress"]) == Decimal("250")


def test_dashboard_stats_default_budget_and_overspend(auth_client):
    add_expense(auth_client, "5600.00", datetime.now().isoformat())

    stats = auth_client.get("/api/dashboard/stats").get_json()

    assert Decimal(stats["budgetAmount"]) == Decimal("5000")
    assert Decimal(stats["budgetRemaining"]) == Decimal("-600")


def test_overall_budget_is_updated_not_duplicated(auth_client):
    first = auth_client.post("/api/budgets", json={"amount": "1000", "isOverall": True})
    second = auth_client.post("/api/budgets", json={"amount": "1500", "isOverall": True})

    assert first.status_code == 201
    assert second.status_code == 200
    budgets = auth_client.get("/api/budgets").get_json()
    assert len(budgets) == 1
    assert Decimal(budgets[0]["amount"]) == Decimal("1500")


def test_budget_validation(auth_client):
    assert auth_client.post("/api/budgets", json={"amount": "10", "period": "yearly", "isOverall": True}).status_code == 400
    assert auth_client.post("/api/budgets", json={"amount": "10", "isOverall": True, "categoryId": 1}).status_code == 400
    assert auth_client.post("/api/budgets", json={"amount": "10"}).status_code == 400
    assert auth_client.post("/api/budgets", json={"amount": "-5", "isOverall": True}).status_code == 400


def test_budget_status_endpoint(auth_client):
    auth_client.post("/api/budgets", json={"amount": "100.00", "categoryId": 1, "period": "daily"})
    add_expense(auth_client, "95.00", datetime.now().isoformat(), category_id=1)

    usage = auth_client.get("/api/budgets/status").get_json()

    assert len(usage) == 1
    assert usage[0]["categoryName"] == "Food & Drinks"
    assert usage[0]["status"] == "near"
    assert Decimal(usage[0]["remaining"]) == Decimal("5")


def test_expense_crud(auth_client):
    created = add_expense(auth_client, "12.30", "2024-03-05T12:00:00", notes="lunch", isRecurring=True)
    assert created["amount"] == "12.30"
    assert created["isRecurring"] is True

    updated = auth_client.put(f"/api/expenses/{created['id']}", json={"amount": "15.00", "categoryId": 2})
    assert updated.status_code == 200
    assert updated.get_json()["categoryId"] == 2

    listed = auth_client.get("/api/expenses?limit=5").get_json()
    assert listed[0]["category"]["name"] == "Transportation"

    ranged = auth_client.get("/api/expenses/date-range?startDate=2024-03-05&endDate=2024-03-05").get_json()
    assert [e["id"] for e in ranged] == [created["id"]]

    assert auth_client.delete(f"/api/expenses/{created['id']}").status_code == 200
    assert auth_client.delete(f"/api/expenses/{created['id']}").status_code == 404


def test_expense_validation(auth_client):
    bad = [
        {"amount": "0", "categoryId": 1},
        {"amount": "1.234", "categoryId": 1},
        {"amount": "abc", "categoryId": 1},
        {"amount": "5", "categoryId": 999},
        {"amount": "5"},
        {"amount": "5", "categoryId": 1, "date": "yesterday"},
        {"amount": "1e30", "categoryId": 1, "date": "2024-03-05"},
        {"amount": 1e27, "categoryId": 1, "date": "2024-03-05"},
        {"amount": "100000000", "categoryId": 1, "date": "2024-03-05"},
    ]
    for body in bad:
        resp = auth_client.post("/api/expenses", json=body)
        assert resp.status_code == 400, body
        assert resp.get_json()["error"] == "invalid_argument"


def test_largest_storable_amount_is_accepted(auth_client):
    created = add_expense(auth_client, "99999999.99", "2024-03-05")

    assert created["amount"] == "99999999.99"


def test_oversized_amounts_rejected_on_every_write(auth_client):
    created = add_expense(auth_client, "10.00", "2024-03-05")

    assert auth_client.put(f"/api/expenses/{created['id']}", json={"amount": "1e30"}).status_code == 400
    assert auth_client.post("/api/budgets", json={"amount": "1e30", "isOverall": True}).status_code == 400
    assert auth_client.post("/api/savings-goals", json={"name": "Moon", "targetAmount": 1e27}).status_code == 400


def test_seed_demo_populates_dashboard(auth_client):
    assert auth_client.post("/api/dashboard/seed").status_code == 200

    stats = auth_client.get("/api/dashboard/stats").get_json()

    assert Decimal(stats["budgetAmount"]) == Decimal("3000")
    assert Decimal(stats["monthlyTotal"]) == Decimal("201.69")
    assert Decimal(stats["savingsProgress"]) == Decimal("250")
