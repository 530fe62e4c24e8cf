from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from mess_system.attendance.model import AttendanceRecord, AttendanceReportRow
from mess_system.billing.model import Bill
from mess_system.core.enums import Role, UpsertOutcome
from mess_system.core.exceptions import StorageError
from mess_system.menu.model import MenuItem
from mess_system.users.model import User


class FakeUsersRepo:
    def __init__(self):
        self._users: dict[int, User] = {}

    def add(self, user_id, full_name, *, username=None, password="secret", role=Role.USER):
        user = User(
            user_id=user_id,
            full_name=full_name,
            username=username or f"{full_name.lower()}@mess.local",
            password_hash=generate_password_hash(password),
            role=role,
        )
        self._users[user_id] = user
        return user

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._users.values(), key=lambda u: u.full_name)


class FakeMenuRepo:
    def __init__(self):
        self._next_id = 1
        self._items: dict[int, MenuItem] = {}

    def add(self, name, item_date, price, *, is_food):
        item_id = self.create(name=name, item_date=item_date, price=Decimal(str(price)), is_food=is_food)
        return self._items[item_id]

    def _sorted(self, items):
        return sorted(items, key=lambda m: (m.item_date, m.is_food, m.name))

    def get_by_id(self, menu_item_id):
        return self._items.get(int(menu_item_id))

    def list_all(self):
        return self._sorted(self._items.values())

    def list_for_date(self, day, *, is_food=None):
        return self.list_range(day, day, is_food=is_food)

    def list_range(self, start, end, *, is_food=None):
        return self._sorted(
            m
            for m in self._items.values()
            if start <= m.item_date <= end and (is_food is None or m.is_food == is_food)
        )

    def find_by_name_and_date(self, name, item_date, *, exclude_id=None):
        for m in self._items.values():
            if m.name.lower() == name.lower() and m.item_date == item_date and m.menu_item_id != exclude_id:
                return m
        return None

    def create(self, *, name, item_date, price, is_food):
        item_id = self._next_id
        self._next_id += 1
        self._items[item_id] = MenuItem(
            menu_item_id=item_id, name=name, item_date=item_date, price=price, is_food=is_food
        )
        return item_id

    def update(self, *, menu_item_id, name, item_date, price, is_food):
        if menu_item_id not in self._items:
            return False
        self._items[menu_item_id] = MenuItem(
            menu_item_id=menu_item_id, name=name, item_date=item_date, price=price, is_food=is_food
        )
        return True

    def delete(self, menu_item_id):
        return self._items.pop(int(menu_item_id), None) is not None


class FakeAttendanceRepo:
    def __init__(self, users: FakeUsersRepo, menu: FakeMenuRepo):
        self._users = users
        self._menu = menu
        self._next_id = 1
        self._records: dict[tuple[int, int], AttendanceRecord] = {}
        self.batches: list[int] = []

    def get_for_user_and_item(self, user_id, menu_item_id):
        return self._records.get((int(user_id), int(menu_item_id)))

    def list_for_menu_items(self, menu_item_ids):
        ids = set(menu_item_ids)
        return [r for r in self._records.values() if r.menu_item_id in ids]

    def upsert(self, *, user_id, menu_item_id, attended):
        existing = self._records.get((user_id, menu_item_id))
        if existing:
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._next_id
            self._next_id += 1
        record = AttendanceRecord(
            attendance_id=attendance_id, user_id=user_id, menu_item_id=menu_item_id, attended=attended
        )
        self._records[(user_id, menu_item_id)] = record
        return record

    def upsert_many(self, marks):
        for m in marks:
            self.upsert(user_id=m.user_id, menu_item_id=m.menu_item_id, attended=m.attended)
        self.batches.append(len(marks))
        return len(marks)

    def exists_for_menu_item(self, menu_item_id):
        return any(r.menu_item_id == menu_item_id for r in self._records.values())

    def list_rows(self, *, start_date, end_date, user_id=None, is_food=None, attended=None):
        rows = []
        for r in self._records.values():
            item = self._menu.get_by_id(r.menu_item_id)
            user = self._users.get_by_id(r.user_id)
            if not item or not user or not start_date <= item.item_date <= end_date:
                continue
            if user_id is not None and r.user_id != user_id:
                continue
            if is_food is not None and item.is_food != is_food:
                continue
            if attended is not None and r.attended != attended:
                continue
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    user_id=r.user_id,
                    full_name=user.full_name,
                    menu_item_id=item.menu_item_id,
                    item_name=item.name,
                    item_date=item.item_date,
                    price=item.price,
                    is_food=item.is_food,
                    attended=r.attended,
                )
            )
        return rows


class FakeBillsRepo:
    def __init__(self, users: FakeUsersRepo):
        self._users = users
        self._next_id = 1
        self._bills: dict[int, Bill] = {}

    def _named(self, bill):
        user = self._users.get_by_id(bill.user_id)
        return Bill(
            bill_id=bill.bill_id,
            user_id=bill.user_id,
            amount=bill.amount,
            period_start=bill.period_start,
            paid=bill.paid,
            full_name=user.full_name if user else None,
        )

    def add(self, user_id, period_start, amount, *, paid=False):
        bill_id = self._next_id
        self._next_id += 1
        self._bills[bill_id] = Bill(
            bill_id=bill_id, user_id=user_id, amount=Decimal(str(amount)), period_start=period_start, paid=paid
        )
        return self._named(self._bills[bill_id])

    def all(self):
        return [self._named(b) for b in self._bills.values()]

    def get_by_id(self, bill_id):
        bill = self._bills.get(int(bill_id))
        return self._named(bill) if bill else None

    def find_for_period(self, user_id, period_start):
        for b in self._bills.values():
            same_month = (b.period_start.year, b.period_start.month) == (period_start.year, period_start.month)
            if b.user_id == user_id and same_month:
                return self._named(b)
        return None

    def compare_and_upsert(self, *, user_id, period_start, amount, create_when_missing):
        existing = self.find_for_period(user_id, period_start)
        if existing:
            self._bills[existing.bill_id] = Bill(
                bill_id=existing.bill_id,
                user_id=user_id,
                amount=amount,
                period_start=existing.period_start,
                paid=existing.paid,
            )
            return UpsertOutcome.UPDATED
        if not create_when_missing:
            return UpsertOutcome.SKIPPED
        self.add(user_id, period_start, amount)
        return UpsertOutcome.CREATED

    def set_paid(self, bill_id, *, paid):
        bill = self._bills.get(int(bill_id))
        if not bill:
            return False
        self._bills[bill.bill_id] = Bill(
            bill_id=bill.bill_id, user_id=bill.user_id, amount=bill.amount, period_start=bill.period_start, paid=paid
        )
        return True

    def delete(self, bill_id):
        return self._bills.pop(int(bill_id), None) is not None

    def list_for_user(self, user_id):
        bills = [self._named(b) for b in self._bills.values() if b.user_id == user_id]
        return sorted(bills, key=lambda b: b.period_start, reverse=True)

    def list_all(self):
        return sorted(self.all(), key=lambda b: (-b.period_start.toordinal(), b.full_name or ""))

    def list_for_month(self, year, month):
        return [b for b in self.list_all() if (b.period_start.year, b.period_start.month) == (year, month)]


class FailingBillsRepo(FakeBillsRepo):
    """Rejects writes for the listed members."""

    def __init__(self, users: FakeUsersRepo, failing_user_ids):
        super().__init__(users)
        self._failing = set(failing_user_ids)

    def compare_and_upsert(self, *, user_id, period_start, amount, create_when_missing):
        if user_id in self._failing:
            raise StorageError("Database write rejected: deadlock")
        return super().compare_and_upsert(
            user_id=user_id, period_start=period_start, amount=amount, create_when_missing=create_when_missing
        )


@pytest.fixture
def users_repo():
    return FakeUsersRepo()


@pytest.fixture
def menu_repo():
    return FakeMenuRepo()


@pytest.fixture
def attendance_repo(users_repo, menu_repo):
    return FakeAttendanceRepo(users_repo, menu_repo)


@pytest.fixture
def bills_repo(users_repo):
    return FakeBillsRepo(users_repo)


@pytest.fixture
def today():
    return date(2024, 5, 10)


@pytest.fixture
def failing_bills_repo(users_repo):
    def make(failing_user_ids):
        return FailingBillsRepo(users_repo, failing_user_ids)

    return make
