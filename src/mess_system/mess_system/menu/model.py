from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class MenuItem:
    """Domain entity: one dated food or drink item with its price."""

    menu_item_id: int
    name: str
    item_date: date
    price: Decimal
    is_food: bool

    @property
    def kind(self) -> str:
        return "Food" if self.is_food else "Drink"
