from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import BillingPeriod, DateSource


@dataclass(frozen=True)
class ResolvedDay:
    """The operative "today" of one request.

    ``utc_day`` is the server UTC date read at resolution time; only the drink
    auto-mark fallback uses it.
    """

    day: date
    source: DateSource
    utc_day: date


@dataclass(frozen=True)
class BillingWindow:
    period: BillingPeriod
    start: date
    end: date

    @property
    def anchor(self) -> date:
        """Bill period anchor: first day of the billed month."""
        return self.start
