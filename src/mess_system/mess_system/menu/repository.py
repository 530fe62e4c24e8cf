from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import MenuItem


class MenuRepository(Protocol):
    """Menu catalog store. The billing engine only ever reads from it."""

    def get_by_id(self, menu_item_id: int) -> Optional[MenuItem]:
        raise NotImplementedError

    def list_all(self) -> Sequence[MenuItem]:
        raise NotImplementedError

    def list_for_date(self, day: date, *, is_food: Optional[bool] = None) -> Sequence[MenuItem]:
        """Items dated ``day``, drinks first."""

        raise NotImplementedError

    def list_range(self, start: date, end: date, *, is_food: Optional[bool] = None) -> Sequence[MenuItem]:
        raise NotImplementedError

    def find_by_name_and_date(
        self, name: str, item_date: date, *, exclude_id: Optional[int] = None
    ) -> Optional[MenuItem]:
        raise NotImplementedError

    def create(self, *, name: str, item_date: date, price: Decimal, is_food: bool) -> int:
        raise NotImplementedError

    def update(self, *, menu_item_id: int, name: str, item_date: date, price: Decimal, is_food: bool) -> bool:
        raise NotImplementedError

    def delete(self, menu_item_id: int) -> bool:
        raise NotImplementedError
