from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty, require_positive_price
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import MenuItem
from .repository import MenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuItemInput:
    name: str
    item_date: date
    price: Decimal
    is_food: bool


class MenuService:
    """Use case: administrative menu catalog maintenance."""

    def __init__(self, menu: MenuRepository, attendance: AttendanceRepository):
        self._menu = menu
        self._attendance = attendance

    def _validate(self, *, name: str, item_date: Optional[date], price, is_food: bool, today: date) -> MenuItemInput:
        name = require_non_empty(name, "Menu name")
        price = require_positive_price(price)
        if item_date is None:
            raise ValidationError("Date is required.")
        if item_date < today:
            raise ValidationError("Date cannot be in the past.")
        return MenuItemInput(name=name, item_date=item_date, price=price, is_food=bool(is_food))

    @staticmethod
    def _duplicate_message(data: MenuItemInput) -> str:
        return f"A menu item '{data.name}' already exists for {data.item_date.isoformat()}."

    def add(self, *, name: str, item_date: Optional[date], price, is_food: bool, today: date) -> MenuItem:
        data = self._validate(name=name, item_date=item_date, price=price, is_food=is_food, today=today)

        if self._menu.find_by_name_and_date(data.name, data.item_date):
            raise ConflictError(self._duplicate_message(data))

        menu_item_id = self._menu.create(
            name=data.name, item_date=data.item_date, price=data.price, is_food=data.is_food
        )
        logger.info("Menu item %s added (%s, %s)", menu_item_id, data.name, data.item_date)
        return MenuItem(menu_item_id=menu_item_id, **asdict(data))

    def edit(
        self,
        *,
        menu_item_id: int,
        name: str,
        item_date: Optional[date],
        price,
        is_food: bool,
        today: date,
    ) -> MenuItem:
        if not self._menu.get_by_id(int(menu_item_id)):
            raise NotFoundError("Menu item not found.")

        data = self._validate(name=name, item_date=item_date, price=price, is_food=is_food, today=today)

        if self._menu.find_by_name_and_date(data.name, data.item_date, exclude_id=int(menu_item_id)):
            raise ConflictError(self._duplicate_message(data))

        self._menu.update(
            menu_item_id=int(menu_item_id),
            name=data.name,
            item_date=data.item_date,
            price=data.price,
            is_food=data.is_food,
        )
        return MenuItem(menu_item_id=int(menu_item_id), **asdict(data))

    def delete(self, menu_item_id: int) -> None:
        item = self._menu.get_by_id(int(menu_item_id))
        if not item:
            raise NotFoundError("Menu item not found.")

        if self._attendance.exists_for_menu_item(item.menu_item_id):
            raise ConflictError("Cannot delete menu item. Attendance records exist for this item.")

        self._menu.delete(item.menu_item_id)
        logger.info("Menu item %s deleted", item.menu_item_id)

    def list_all(self) -> Sequence[MenuItem]:
        return self._menu.list_all()

    def list_for_date(self, day: date) -> Sequence[MenuItem]:
        return self._menu.list_for_date(day)
