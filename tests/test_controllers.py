from __future__ import annotations

from datetime import date

import pytest

from mess_system.common.datetime_utils import FixedClock
from mess_system.container import wire_container
from mess_system.core.enums import Role
from mess_system.main import create_app


@pytest.fixture
def app(users_repo, menu_repo, attendance_repo, bills_repo, today):
    users_repo.add(1, "Admin", username="admin@mess.local", password="admin123", role=Role.ADMIN)
    users_repo.add(2, "Alice", username="alice@mess.local", password="alice123")
    container = wire_container(
        users_repo=users_repo,
        menu_repo=menu_repo,
        attendance_repo=attendance_repo,
        bills_repo=bills_repo,
        clock=FixedClock(local=today),
    )
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, username, password):
    return client.post("/login", json={"username": username, "password": password})


def test_login_rejects_bad_credentials(client):
    resp = _login(client, "admin@mess.local", "wrong")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_admin_routes_require_admin_role(client):
    assert client.get("/admin/bills").status_code == 401

    _login(client, "alice@mess.local", "alice123")
    assert client.get("/admin/bills").status_code == 403


def test_auto_mark_and_generate_bills_flow(client, menu_repo, today):
    menu_repo.add("Tea", today, 10, is_food=False)
    menu_repo.add("Lunch", today, 50, is_food=True)
    _login(client, "admin@mess.local", "admin123")

    marked = client.post("/admin/attendance/auto-mark-drinks", json={})
    assert marked.status_code == 200
    assert marked.get_json()["message"] == "Successfully auto-marked 2 drink attendances!"
    assert marked.get_json()["warning"] is None

    billed = client.post("/admin/bills/generate", json={"period": "current"})
    body = billed.get_json()
    assert body["message"] == "Bills for current month (up to today) processed! Generated: 2, Updated: 0"

    listing = client.get("/admin/bills").get_json()
    assert listing["summary"]["total_bills"] == 2
    assert {b["amount"] for b in listing["data"]} == {"10"}


def test_client_date_cookie_drives_auto_mark(client, menu_repo):
    menu_repo.add("Tea", date(2024, 5, 11), 10, is_food=False)
    _login(client, "admin@mess.local", "admin123")
    client.set_cookie("clientDate", "2024-05-11")

    body = client.post("/admin/attendance/auto-mark-drinks", json={}).get_json()

    assert body["data"]["day"] == "2024-05-11"
    assert body["data"]["marked_count"] == 2


def test_mark_paid_missing_bill_is_404(client):
    _login(client, "admin@mess.local", "admin123")

    resp = client.post("/admin/bills/999/paid")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "NOT_FOUND", "message": "Bill not found!"}


def test_menu_add_validation_error(client, today):
    _login(client, "admin@mess.local", "admin123")

    resp = client.post("/admin/menu", json={"name": "Tea", "date": "2024-05-01", "price": "10", "is_food": False})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Date cannot be in the past."


def test_member_sees_own_bills_and_history(client, users_repo, bills_repo, menu_repo, attendance_repo, today):
    tea = menu_repo.add("Tea", today, 10, is_food=False)
    attendance_repo.upsert(user_id=2, menu_item_id=tea.menu_item_id, attended=True)
    bills_repo.add(2, date(2024, 5, 1), 10)
    bills_repo.add(1, date(2024, 5, 1), 99)
    _login(client, "alice@mess.local", "alice123")

    bills = client.get("/me/bills?status=unpaid").get_json()
    history = client.get("/me/attendance").get_json()

    assert [b["amount"] for b in bills["data"]] == ["10"]
    assert bills["summary"]["unpaid_amount"] == "10"
    assert history["data"]["drink"] == 1


def test_admin_dashboard_uses_resolved_day(client, menu_repo, attendance_repo, bills_repo):
    tea = menu_repo.add("Tea", date(2024, 5, 11), 10, is_food=False)
    menu_repo.add("Lunch", date(2024, 5, 10), 50, is_food=True)
    attendance_repo.upsert(user_id=2, menu_item_id=tea.menu_item_id, attended=True)
    bills_repo.add(2, date(2024, 5, 1), 25)
    _login(client, "admin@mess.local", "admin123")

    body = client.get("/admin/dashboard?clientDate=2024-05-11").get_json()

    assert body["data"]["day"] == "2024-05-11"
    assert body["data"]["total_users"] == 2
    assert (body["data"]["today_food"], body["data"]["today_drink"]) == (0, 1)
    assert body["data"]["today_attendance"] == 1
    assert body["data"]["unpaid_bills"] == 1
    assert body["data"]["pending_revenue"] == "25"


def test_member_home_follows_client_date_cookie(client, menu_repo, bills_repo):
    menu_repo.add("Tea", date(2024, 6, 1), 10, is_food=False)
    bills_repo.add(2, date(2024, 5, 1), 40)
    _login(client, "alice@mess.local", "alice123")
    client.set_cookie("clientDate", "2024-06-01")

    body = client.get("/me/home").get_json()

    assert body["data"]["day"] == "2024-06-01"
    assert [m["name"] for m in body["data"]["menu"]] == ["Tea"]
    assert body["data"]["previous_month"]["unpaid_amount"] == "40"
    assert body["data"]["current_month"]["total_amount"] == "0"


def test_member_monthly_bills(client, bills_repo):
    bills_repo.add(2, date(2024, 5, 1), 10, paid=True)
    bills_repo.add(2, date(2024, 4, 1), 99)
    bills_repo.add(1, date(2024, 5, 1), 50)
    _login(client, "alice@mess.local", "alice123")

    body = client.get("/me/bills/monthly/2024/5").get_json()
    bad = client.get("/me/bills/monthly/2024/13")

    assert [b["amount"] for b in body["data"]["bills"]] == ["10"]
    assert body["data"]["summary"]["paid_amount"] == "10"
    assert bad.status_code == 400


def test_non_object_json_body_is_ignored(client):
    _login(client, "admin@mess.local", "admin123")

    resp = client.post("/admin/bills/generate", json="period=previous")

    assert resp.status_code == 200
    assert resp.get_json()["message"].startswith("Bills for current month")
