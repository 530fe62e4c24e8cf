from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    USER = "user"


class DateSource(str, Enum):
    """Where the operative business day came from."""

    CLIENT_PARAM = "CLIENT_PARAM"
    CLIENT_COOKIE = "CLIENT_COOKIE"
    SERVER_LOCAL = "SERVER_LOCAL"


class BillingPeriod(str, Enum):
    CURRENT = "current"
    PREVIOUS = "previous"

    @classmethod
    def parse(cls, value: "BillingPeriod | str | None") -> "BillingPeriod":
        if isinstance(value, BillingPeriod):
            return value
        if (value or "").strip().lower() == cls.PREVIOUS.value:
            return cls.PREVIOUS
        return cls.CURRENT

    @property
    def label(self) -> str:
        if self is BillingPeriod.PREVIOUS:
            return "previous month"
        return "current month (up to today)"


class UpsertOutcome(str, Enum):
    """Result of a compare-and-upsert write."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    SKIPPED = "SKIPPED"
