"""Default-opt-in sweep for drinks.

Every member is assumed to take every drink of the day unless an admin
records otherwise later. The sweep only ever moves records towards
``attended=True`` and never looks at food items.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..dates.model import ResolvedDay
from ..menu.model import MenuItem
from ..menu.repository import MenuRepository
from ..users.repository import UserRepository
from .model import AttendanceMark
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

UTC_FALLBACK_WARNING = "Auto-mark used UTC date fallback to find drink menus."


@dataclass(frozen=True)
class AutoMarkOutcome:
    day: date
    marked_count: int
    drink_count: int
    used_fallback: bool = False
    warning: Optional[str] = None

    @property
    def message(self) -> str:
        if self.drink_count == 0:
            return "No drink menus found for today to auto-mark."
        return f"Successfully auto-marked {self.marked_count} drink attendances!"


class DrinkAutoMarker:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository, menu: MenuRepository):
        self._attendance = attendance
        self._users = users
        self._menu = menu

    def _drinks_for(self, resolved: ResolvedDay) -> tuple[date, Sequence[MenuItem], bool]:
        drinks = self._menu.list_for_date(resolved.day, is_food=False)
        if drinks or resolved.utc_day == resolved.day:
            return resolved.day, drinks, False

        # Client and server disagree on the date; try the server's UTC day.
        drinks = self._menu.list_for_date(resolved.utc_day, is_food=False)
        if drinks:
            return resolved.utc_day, drinks, True
        return resolved.day, drinks, False

    def plan(self, drinks: Sequence[MenuItem]) -> list[AttendanceMark]:
        """Marks needed so every (user, drink) pair ends up attended."""
        drink_ids = [d.menu_item_id for d in drinks if not d.is_food]
        if not drink_ids:
            return []

        existing = {
            (r.user_id, r.menu_item_id): r.attended
            for r in self._attendance.list_for_menu_items(drink_ids)
        }

        marks: list[AttendanceMark] = []
        for user in self._users.list_all():
            for drink_id in drink_ids:
                if existing.get((user.user_id, drink_id)) is True:
                    continue
                marks.append(AttendanceMark(user_id=user.user_id, menu_item_id=drink_id, attended=True))
        return marks

    def run(self, resolved: ResolvedDay) -> AutoMarkOutcome:
        day, drinks, used_fallback = self._drinks_for(resolved)
        warning = UTC_FALLBACK_WARNING if used_fallback else None
        if used_fallback:
            logger.warning("No drinks on %s, auto-marking UTC day %s instead", resolved.day, day)

        if not drinks:
            logger.info("No drink menus on %s; nothing to auto-mark", day)
            return AutoMarkOutcome(day=day, marked_count=0, drink_count=0)

        marks = self.plan(drinks)
        marked = self._attendance.upsert_many(marks)

        logger.info("Auto-marked %s drink attendances for %s (%s drinks)", marked, day, len(drinks))
        return AutoMarkOutcome(
            day=day,
            marked_count=marked,
            drink_count=len(drinks),
            used_fallback=used_fallback,
            warning=warning,
        )
