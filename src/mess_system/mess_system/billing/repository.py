from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import UpsertOutcome
from .model import Bill


class BillRepository(Protocol):
    def get_by_id(self, bill_id: int) -> Optional[Bill]:
        raise NotImplementedError

    def compare_and_upsert(
        self,
        *,
        user_id: int,
        period_start: date,
        amount: Decimal,
        create_when_missing: bool,
    ) -> UpsertOutcome:
        """Look up the user's bill for the month and write it in one transaction.

        Existing bill: amount overwritten, ``paid`` untouched (UPDATED).
        Missing bill: inserted unpaid if ``create_when_missing`` (CREATED),
        otherwise nothing is written (SKIPPED).
        """

        raise NotImplementedError

    def set_paid(self, bill_id: int, *, paid: bool) -> bool:
        raise NotImplementedError

    def delete(self, bill_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Bill]:
        """Newest period first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Bill]:
        """Newest period first, then member name."""

        raise NotImplementedError

    def list_for_month(self, year: int, month: int) -> Sequence[Bill]:
        raise NotImplementedError
