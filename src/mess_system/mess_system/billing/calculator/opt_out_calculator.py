from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceReportRow
from ...menu.model import MenuItem
from ..model import ChargeBreakdown
from .base import ChargeCalculator


class OptOutDrinkCalculator(ChargeCalculator):
    """Food is billed on confirmed attendance; drinks are billed by default.

    total = prices of attended items (food or drink)
          + prices of window drinks with no attended=True record
    """

    def charge(
        self,
        *,
        attended_rows: Sequence[AttendanceReportRow],
        window_drinks: Sequence[MenuItem],
    ) -> ChargeBreakdown:
        attended = [r for r in attended_rows if r.attended]
        attended_ids = {r.menu_item_id for r in attended}

        food = sum((r.price for r in attended if r.is_food), Decimal("0"))
        drinks = sum((r.price for r in attended if not r.is_food), Decimal("0"))
        unmarked = sum(
            (d.price for d in window_drinks if not d.is_food and d.menu_item_id not in attended_ids),
            Decimal("0"),
        )
        return ChargeBreakdown(attended_food=food, attended_drinks=drinks, unmarked_drinks=unmarked)
