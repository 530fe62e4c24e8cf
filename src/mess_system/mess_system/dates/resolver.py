"""Business day and billing window resolution.

The browser may run in another timezone than the server, so "today" is taken
from the first usable value of: the explicit client date, the ``clientDate``
cookie set by the page script, then the server's local date. Nothing here
raises on bad client input; an unusable value just falls through.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..common.datetime_utils import Clock, first_day_of_month
from ..core.enums import BillingPeriod, DateSource
from .model import BillingWindow, ResolvedDay

logger = logging.getLogger(__name__)

ClientDate = Union[date, datetime, str, None]

_FALLBACK_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%d.%m.%Y")


def parse_client_date(value: ClientDate) -> Optional[date]:
    """Best-effort parse of a client supplied date; None when unusable.

    Datetime strings keep the calendar date as written (no timezone shift):
    the client already sent its own local date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso).date()
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def resolve_business_day(
    *,
    clock: Clock,
    client_date: ClientDate = None,
    cookie_value: Optional[str] = None,
) -> ResolvedDay:
    utc_day = clock.utc_today()

    day = parse_client_date(client_date)
    if day is not None:
        return ResolvedDay(day=day, source=DateSource.CLIENT_PARAM, utc_day=utc_day)
    if client_date not in (None, ""):
        logger.debug("Ignoring unparseable client date %r", client_date)

    day = parse_client_date(cookie_value)
    if day is not None:
        return ResolvedDay(day=day, source=DateSource.CLIENT_COOKIE, utc_day=utc_day)
    if cookie_value:
        logger.debug("Ignoring unparseable client date cookie %r", cookie_value)

    return ResolvedDay(day=clock.local_today(), source=DateSource.SERVER_LOCAL, utc_day=utc_day)


def resolve_billing_window(period: Union[BillingPeriod, str, None], today: date) -> BillingWindow:
    period = BillingPeriod.parse(period)
    first_of_month = first_day_of_month(today)

    if period is BillingPeriod.PREVIOUS:
        end = first_of_month - timedelta(days=1)
        return BillingWindow(period=period, start=first_day_of_month(end), end=end)

    return BillingWindow(period=period, start=first_of_month, end=today)
