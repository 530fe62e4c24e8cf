from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


class Clock:
    """Server clock.

    Note: Wrapped so tests can pass a fixed clock instead of patching datetime.
    """

    def local_today(self) -> date:
        return datetime.now().date()

    def utc_today(self) -> date:
        return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class FixedClock(Clock):
    local: date
    utc: Optional[date] = None

    def local_today(self) -> date:
        return self.local

    def utc_today(self) -> date:
        return self.utc or self.local
