"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REQUIRED_DAILY_MINUTES = 480
DEFAULT_WORKDAY_START_MINUTES = 9 * 60
DEFAULT_WORKDAY_END_MINUTES = 18 * 60
DEFAULT_GRACE_LATE_MINUTES = 0
DEFAULT_GRACE_EARLY_MINUTES = 0

CORRECTION_NOTE_MAX_LENGTH = 500
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
