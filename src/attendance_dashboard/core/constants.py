"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "UTC"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10
CLOCK_REFRESH_SECONDS = 1.0

NO_SHIFT_PLACEHOLDER = "—"
NOT_PUNCHED_MESSAGE = "Not yet punched today"
