from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceReportRow
from ...menu.model import MenuItem
from ..model import ChargeBreakdown


class ChargeCalculator(ABC):
    """Calculator interface (Strategy Pattern for billing rules)."""

    @abstractmethod
    def charge(
        self,
        *,
        attended_rows: Sequence[AttendanceReportRow],
        window_drinks: Sequence[MenuItem],
    ) -> ChargeBreakdown:
        raise NotImplementedError
