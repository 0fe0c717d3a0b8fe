"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_THRESHOLD = time(9, 5)
DEFAULT_TIMEZONE = "Europe/Paris"
DEFAULT_LOCK_TIMEOUT_SECONDS = 10
DEFAULT_LIST_LIMIT = 200

MINUTES_PER_HOUR = 60
DAYS_PER_WEEK = 7

WEEKDAY_KEYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
DEFAULT_WEEKLY_PATTERN = {
    "mon": [["09:00", "17:00"]],
    "tue": [["09:00", "17:00"]],
    "wed": [["09:00", "17:00"]],
    "thu": [["09:00", "17:00"]],
    "fri": [["09:00", "17:00"]],
}
