from __future__ import annotations

from datetime import date

from mess_system.attendance.auto_marker import UTC_FALLBACK_WARNING, DrinkAutoMarker
from mess_system.core.enums import DateSource
from mess_system.dates.model import ResolvedDay


def _resolved(day, utc_day=None):
    return ResolvedDay(day=day, source=DateSource.CLIENT_PARAM, utc_day=utc_day or day)


def _setup(users_repo, menu_repo, day):
    for uid, name in [(1, "Alice"), (2, "Bob"), (3, "Chen")]:
        users_repo.add(uid, name)
    tea = menu_repo.add("Tea", day, 10, is_food=False)
    lunch = menu_repo.add("Lunch", day, 50, is_food=True)
    return tea, lunch


def test_marks_every_user_for_every_drink_of_the_day(users_repo, menu_repo, attendance_repo, today):
    tea, _ = _setup(users_repo, menu_repo, today)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(today))

    assert outcome.marked_count == 3
    assert outcome.drink_count == 1
    assert outcome.message == "Successfully auto-marked 3 drink attendances!"
    assert all(attendance_repo.get_for_user_and_item(uid, tea.menu_item_id).attended for uid in (1, 2, 3))


def test_second_run_is_a_no_op(users_repo, menu_repo, attendance_repo, today):
    _setup(users_repo, menu_repo, today)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    marker.run(_resolved(today))
    outcome = marker.run(_resolved(today))

    assert outcome.marked_count == 0
    assert outcome.message == "Successfully auto-marked 0 drink attendances!"


def test_food_is_never_touched(users_repo, menu_repo, attendance_repo, today):
    _, lunch = _setup(users_repo, menu_repo, today)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    marker.run(_resolved(today))

    assert not attendance_repo.exists_for_menu_item(lunch.menu_item_id)


def test_flips_opted_out_drinks_back_to_attended(users_repo, menu_repo, attendance_repo, today):
    tea, _ = _setup(users_repo, menu_repo, today)
    attendance_repo.upsert(user_id=2, menu_item_id=tea.menu_item_id, attended=False)
    attendance_repo.upsert(user_id=3, menu_item_id=tea.menu_item_id, attended=True)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(today))

    assert outcome.marked_count == 2
    assert attendance_repo.get_for_user_and_item(2, tea.menu_item_id).attended is True


def test_all_marks_are_written_as_one_batch(users_repo, menu_repo, attendance_repo, today):
    _setup(users_repo, menu_repo, today)
    menu_repo.add("Coffee", today, 15, is_food=False)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(today))

    assert outcome.marked_count == 6
    assert attendance_repo.batches == [6]


def test_no_drinks_reports_nothing_to_mark(users_repo, menu_repo, attendance_repo, today):
    users_repo.add(1, "Alice")
    menu_repo.add("Lunch", today, 50, is_food=True)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(today))

    assert outcome.marked_count == 0
    assert outcome.message == "No drink menus found for today to auto-mark."
    assert outcome.warning is None


def test_falls_back_to_utc_day_when_client_day_has_no_drinks(users_repo, menu_repo, attendance_repo):
    users_repo.add(1, "Alice")
    tea = menu_repo.add("Tea", date(2024, 5, 9), 10, is_food=False)
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(date(2024, 5, 10), utc_day=date(2024, 5, 9)))

    assert outcome.used_fallback is True
    assert outcome.warning == UTC_FALLBACK_WARNING
    assert outcome.day == date(2024, 5, 9)
    assert attendance_repo.get_for_user_and_item(1, tea.menu_item_id).attended is True


def test_no_warning_when_utc_day_has_no_drinks_either(users_repo, menu_repo, attendance_repo):
    users_repo.add(1, "Alice")
    marker = DrinkAutoMarker(attendance_repo, users_repo, menu_repo)

    outcome = marker.run(_resolved(date(2024, 5, 10), utc_day=date(2024, 5, 9)))

    assert outcome.used_fallback is False
    assert outcome.warning is None
    assert outcome.drink_count == 0
