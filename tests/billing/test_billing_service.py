from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from mess_system.billing.service import BillingService
from mess_system.core.enums import BillingPeriod
from mess_system.dates.resolver import resolve_billing_window


def _service(bills_repo, attendance_repo, users_repo, menu_repo):
    return BillingService(bills_repo, attendance_repo, users_repo, menu_repo)


@pytest.fixture
def service(bills_repo, attendance_repo, users_repo, menu_repo):
    return _service(bills_repo, attendance_repo, users_repo, menu_repo)


@pytest.fixture
def lunch_and_tea(menu_repo, today):
    return menu_repo.add("Lunch", today, 50, is_food=True), menu_repo.add("Tea", today, 10, is_food=False)


def test_creates_bill_with_food_and_unrecorded_drink(service, users_repo, attendance_repo, bills_repo, lunch_and_tea, today):
    lunch, _ = lunch_and_tea
    users_repo.add(1, "Alice")
    attendance_repo.upsert(user_id=1, menu_item_id=lunch.menu_item_id, attended=True)

    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert (summary.created, summary.updated) == (1, 0)
    assert summary.message == "Bills for current month (up to today) processed! Generated: 1, Updated: 0"
    (bill,) = bills_repo.all()
    assert bill.amount == Decimal("60")
    assert bill.period_start == date(2024, 5, 1)
    assert bill.paid is False


def test_rerun_updates_amount_and_keeps_paid_flag(service, users_repo, attendance_repo, bills_repo, lunch_and_tea, today):
    """Attending the Tea moves its 10 from "unmarked" to "attended", so the total stays 60.

    A hand-worked figure of 50 for this scenario is wrong: it drops the Tea even
    though the charge is attended items plus window drinks without an attended
    record. Bill generation has always charged 60 here; see DESIGN.md.
    """
    lunch, tea = lunch_and_tea
    users_repo.add(1, "Alice")
    attendance_repo.upsert(user_id=1, menu_item_id=lunch.menu_item_id, attended=True)
    service.generate_bills(BillingPeriod.CURRENT, today=today)
    (bill,) = bills_repo.all()
    bills_repo.set_paid(bill.bill_id, paid=True)

    attendance_repo.upsert(user_id=1, menu_item_id=tea.menu_item_id, attended=True)
    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert (summary.created, summary.updated) == (0, 1)
    (bill,) = bills_repo.all()
    assert bill.amount == Decimal("60")
    assert bill.paid is True


def test_zero_charge_does_not_create_a_bill(service, users_repo, menu_repo, bills_repo, today):
    users_repo.add(1, "Alice")
    menu_repo.add("Lunch", today, 50, is_food=True)

    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert (summary.created, summary.updated, summary.skipped) == (0, 0, 1)
    assert bills_repo.all() == []


def test_existing_bill_is_overwritten_even_with_zero(service, users_repo, bills_repo, today):
    users_repo.add(1, "Alice")
    bills_repo.add(1, date(2024, 5, 1), 30)

    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert summary.updated == 1
    assert bills_repo.all()[0].amount == Decimal("0")


def test_bill_matched_by_month_not_exact_anchor(service, users_repo, bills_repo, lunch_and_tea, today):
    users_repo.add(1, "Alice")
    bills_repo.add(1, date(2024, 5, 15), 5)

    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert (summary.created, summary.updated) == (0, 1)
    assert len(bills_repo.all()) == 1
    assert bills_repo.all()[0].amount == Decimal("10")


def test_previous_period_ignores_current_month(service, users_repo, menu_repo, bills_repo, today):
    users_repo.add(1, "Alice")
    menu_repo.add("Tea", date(2024, 4, 20), 10, is_food=False)
    menu_repo.add("Coffee", today, 15, is_food=False)

    summary = service.generate_bills("previous", today=today)

    assert summary.period is BillingPeriod.PREVIOUS
    assert summary.message.startswith("Bills for previous month processed!")
    (bill,) = bills_repo.all()
    assert bill.period_start == date(2024, 4, 1)
    assert bill.amount == Decimal("10")


def test_one_failing_member_does_not_stop_the_run(
    users_repo, attendance_repo, menu_repo, failing_bills_repo, lunch_and_tea, today
):
    users_repo.add(1, "Alice")
    users_repo.add(2, "Bob")
    users_repo.add(3, "Chen")
    bills_repo = failing_bills_repo({2})
    service = _service(bills_repo, attendance_repo, users_repo, menu_repo)

    summary = service.generate_bills(BillingPeriod.CURRENT, today=today)

    assert summary.created == 2
    assert [f.full_name for f in summary.failures] == ["Bob"]
    assert "Failed for 1 member(s): Bob" in summary.message
    assert sorted(b.user_id for b in bills_repo.all()) == [1, 3]


def test_compute_charge_reports_breakdown(service, users_repo, attendance_repo, menu_repo, lunch_and_tea, today):
    lunch, tea = lunch_and_tea
    users_repo.add(1, "Alice")
    attendance_repo.upsert(user_id=1, menu_item_id=lunch.menu_item_id, attended=True)
    attendance_repo.upsert(user_id=1, menu_item_id=tea.menu_item_id, attended=False)

    window = resolve_billing_window(BillingPeriod.CURRENT, today)
    breakdown = service.compute_charge(1, window, menu_repo.list_range(window.start, window.end, is_food=False))

    assert breakdown.attended_food == Decimal("50")
    assert breakdown.unmarked_drinks == Decimal("10")
