"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_RANGE_DAYS = 7
MIN_PASSWORD_LENGTH = 6

# Materialized leave days carry this note so they can be told apart from
# manually created shifts of the same type on the same date.
AUTO_GENERATED_NOTE = "Automatically created from {code} request"
