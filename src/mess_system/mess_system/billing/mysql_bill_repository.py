from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import UpsertOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, to_decimal
from .model import Bill
from .repository import BillRepository

_SELECT = """
    SELECT b.bill_id, b.user_id, b.amount, b.period_start, b.paid, u.full_name
    FROM bills b
    LEFT JOIN users u ON u.user_id = b.user_id
"""


def _row_to_bill(r: dict) -> Bill:
    return Bill(
        bill_id=int(r["bill_id"]),
        user_id=int(r["user_id"]),
        amount=to_decimal(r["amount"]),
        period_start=normalize_mysql_date(r["period_start"]),
        paid=bool(r["paid"]),
        full_name=r.get("full_name"),
    )


class MySQLBillRepository(BillRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, bill_id: int) -> Optional[Bill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE b.bill_id=%s", (int(bill_id),))
            r = fetchone(cur)
            return _row_to_bill(r) if r else None

    def compare_and_upsert(
        self,
        *,
        user_id: int,
        period_start: date,
        amount: Decimal,
        create_when_missing: bool,
    ) -> UpsertOutcome:
        # No lock: two concurrent runs for the same month both write, the
        # later amount wins.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT bill_id FROM bills
                WHERE user_id=%s AND YEAR(period_start)=%s AND MONTH(period_start)=%s
                ORDER BY bill_id ASC
                LIMIT 1
                """,
                (int(user_id), period_start.year, period_start.month),
            )
            existing = fetchone(cur)

            if existing:
                cur.execute(
                    "UPDATE bills SET amount=%s WHERE bill_id=%s",
                    (amount, int(existing["bill_id"])),
                )
                return UpsertOutcome.UPDATED

            if not create_when_missing:
                return UpsertOutcome.SKIPPED

            cur.execute(
                "INSERT INTO bills(user_id, amount, period_start, paid) VALUES(%s,%s,%s,0)",
                (int(user_id), amount, period_start),
            )
            return UpsertOutcome.CREATED

    def set_paid(self, bill_id: int, *, paid: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE bills SET paid=%s WHERE bill_id=%s", (1 if paid else 0, int(bill_id)))
            return cur.rowcount > 0

    def delete(self, bill_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM bills WHERE bill_id=%s", (int(bill_id),))
            return cur.rowcount > 0

    def list_for_user(self, user_id: int) -> Sequence[Bill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE b.user_id=%s ORDER BY b.period_start DESC, b.bill_id DESC",
                (int(user_id),),
            )
            return [_row_to_bill(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Bill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY b.period_start DESC, u.full_name ASC, b.bill_id ASC")
            return [_row_to_bill(r) for r in fetchall(cur)]

    def list_for_month(self, year: int, month: int) -> Sequence[Bill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE YEAR(b.period_start)=%s AND MONTH(b.period_start)=%s
                ORDER BY u.full_name ASC, b.bill_id ASC
                """,
                (int(year), int(month)),
            )
            return [_row_to_bill(r) for r in fetchall(cur)]
