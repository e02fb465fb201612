"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_BREAKS = 3
DEFAULT_TIMEZONE = "Australia/Sydney"
DEFAULT_HISTORY_LIMIT = 30
DISPLAY_DECIMAL_PLACES = 2
CLOCK_FORMAT = "%H:%M"
