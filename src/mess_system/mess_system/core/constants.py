"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_CLIENT_DATE_COOKIE = "clientDate"
RECENT_BILLS_LIMIT = 5
