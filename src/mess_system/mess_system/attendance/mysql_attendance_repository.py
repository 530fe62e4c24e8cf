from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, to_decimal
from .model import AttendanceMark, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        menu_item_id=int(r["menu_item_id"]),
        attended=bool(r["attended"]),
    )


def _upsert_in_transaction(cur, *, user_id: int, menu_item_id: int, attended: bool) -> AttendanceRecord:
    # No unique key on (user_id, menu_item_id): look up by the natural key,
    # then update or insert inside the caller's transaction.
    cur.execute(
        """
        SELECT attendance_id FROM attendances
        WHERE user_id=%s AND menu_item_id=%s
        ORDER BY attendance_id ASC
        LIMIT 1
        """,
        (int(user_id), int(menu_item_id)),
    )
    existing = fetchone(cur)
    if existing:
        attendance_id = int(existing["attendance_id"])
        cur.execute(
            "UPDATE attendances SET attended=%s WHERE attendance_id=%s",
            (1 if attended else 0, attendance_id),
        )
    else:
        cur.execute(
            "INSERT INTO attendances(user_id, menu_item_id, attended) VALUES(%s,%s,%s)",
            (int(user_id), int(menu_item_id), 1 if attended else 0),
        )
        attendance_id = int(cur.lastrowid)

    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=int(user_id),
        menu_item_id=int(menu_item_id),
        attended=bool(attended),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_menu_items(self, menu_item_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        ids = [int(i) for i in menu_item_ids]
        if not ids:
            return []

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, user_id, menu_item_id, attended
                FROM attendances
                WHERE menu_item_id IN ({placeholders})
                ORDER BY attendance_id ASC
                """,
                tuple(ids),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def upsert(self, *, user_id: int, menu_item_id: int, attended: bool) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            return _upsert_in_transaction(cur, user_id=user_id, menu_item_id=menu_item_id, attended=attended)

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            for mark in marks:
                _upsert_in_transaction(
                    cur, user_id=mark.user_id, menu_item_id=mark.menu_item_id, attended=mark.attended
                )
        return len(marks)

    def exists_for_menu_item(self, menu_item_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM attendances WHERE menu_item_id=%s LIMIT 1", (int(menu_item_id),))
            return fetchone(cur) is not None

    def list_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
        is_food: Optional[bool] = None,
        attended: Optional[bool] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["m.item_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(int(user_id))
        if is_food is not None:
            clauses.append("m.is_food=%s")
            params.append(1 if is_food else 0)
        if attended is not None:
            clauses.append("a.attended=%s")
            params.append(1 if attended else 0)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.user_id, u.full_name,
                    m.menu_item_id, m.name AS item_name, m.item_date, m.price, m.is_food,
                    a.attended
                FROM attendances a
                JOIN menu_items m ON m.menu_item_id = a.menu_item_id
                JOIN users u ON u.user_id = a.user_id
                WHERE {where}
                ORDER BY m.item_date DESC, u.full_name ASC, m.is_food ASC, m.menu_item_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    menu_item_id=int(r["menu_item_id"]),
                    item_name=r["item_name"],
                    item_date=normalize_mysql_date(r["item_date"]),
                    price=to_decimal(r["price"]),
                    is_food=bool(r["is_food"]),
                    attended=bool(r["attended"]),
                )
                for r in rows
            ]
