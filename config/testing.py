DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

# Tests pin the built-in defaults regardless of the developer's environment
ATTENDANCE_POLICY = {
    "required_daily_minutes": None,
    "half_day_threshold_minutes": None,
    "workday_start_minutes": None,
    "workday_end_minutes": None,
    "grace_late_minutes": None,
    "grace_early_minutes": None,
}
