from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, to_decimal
from .model import MenuItem
from .repository import MenuRepository

_COLUMNS = "menu_item_id, name, item_date, price, is_food"


def _row_to_item(r: dict) -> MenuItem:
    return MenuItem(
        menu_item_id=int(r["menu_item_id"]),
        name=r["name"],
        item_date=normalize_mysql_date(r["item_date"]),
        price=to_decimal(r["price"]),
        is_food=bool(r["is_food"]),
    )


class MySQLMenuRepository(MenuRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, menu_item_id: int) -> Optional[MenuItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM menu_items WHERE menu_item_id=%s", (int(menu_item_id),))
            r = fetchone(cur)
            return _row_to_item(r) if r else None

    def list_all(self) -> Sequence[MenuItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM menu_items ORDER BY item_date DESC, is_food ASC, name ASC")
            return [_row_to_item(r) for r in fetchall(cur)]

    def list_for_date(self, day: date, *, is_food: Optional[bool] = None) -> Sequence[MenuItem]:
        return self.list_range(day, day, is_food=is_food)

    def list_range(self, start: date, end: date, *, is_food: Optional[bool] = None) -> Sequence[MenuItem]:
        clauses = ["item_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if is_food is not None:
            clauses.append("is_food=%s")
            params.append(1 if is_food else 0)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM menu_items
                WHERE {where}
                ORDER BY item_date ASC, is_food ASC, menu_item_id ASC
                """,
                tuple(params),
            )
            return [_row_to_item(r) for r in fetchall(cur)]

    def find_by_name_and_date(
        self, name: str, item_date: date, *, exclude_id: Optional[int] = None
    ) -> Optional[MenuItem]:
        query = f"SELECT {_COLUMNS} FROM menu_items WHERE name=%s AND item_date=%s"
        params: list[object] = [name, item_date]
        if exclude_id is not None:
            query += " AND menu_item_id<>%s"
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query + " LIMIT 1", tuple(params))
            r = fetchone(cur)
            return _row_to_item(r) if r else None

    def create(self, *, name: str, item_date: date, price: Decimal, is_food: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO menu_items(name, item_date, price, is_food)
                VALUES(%s,%s,%s,%s)
                """,
                (name, item_date, price, 1 if is_food else 0),
            )
            return int(cur.lastrowid)

    def update(self, *, menu_item_id: int, name: str, item_date: date, price: Decimal, is_food: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE menu_items
                SET name=%s, item_date=%s, price=%s, is_food=%s
                WHERE menu_item_id=%s
                """,
                (name, item_date, price, 1 if is_food else 0, int(menu_item_id)),
            )
            return cur.rowcount > 0

    def delete(self, menu_item_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM menu_items WHERE menu_item_id=%s", (int(menu_item_id),))
            return cur.rowcount > 0
