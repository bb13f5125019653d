import os
from typing import Optional


def _minutes_env(name: str) -> Optional[int]:
    """Read a minute count; unset or blank means 'use the built-in default'."""
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else None


def _clock_env(name: str) -> Optional[int]:
    """Read a time of day as HH:MM (or plain minutes since midnight)."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    if ":" in raw:
        hours, minutes = raw.split(":", 1)
        return int(hours) * 60 + int(minutes)
    return int(raw)


class Config:
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Deployment-wide policy, used where an organization leaves a field unset
    REQUIRED_DAILY_MINUTES = _minutes_env("REQUIRED_DAILY_MINUTES")
    HALF_DAY_THRESHOLD_MINUTES = _minutes_env("HALF_DAY_THRESHOLD_MINUTES")
    WORKDAY_START = _clock_env("WORKDAY_START")
    WORKDAY_END = _clock_env("WORKDAY_END")
    GRACE_LATE_MINUTES = _minutes_env("GRACE_LATE_MINUTES")
    GRACE_EARLY_MINUTES = _minutes_env("GRACE_EARLY_MINUTES")


ATTENDANCE_POLICY = {
    "required_daily_minutes": Config.REQUIRED_DAILY_MINUTES,
    "half_day_threshold_minutes": Config.HALF_DAY_THRESHOLD_MINUTES,
    "workday_start_minutes": Config.WORKDAY_START,
    "workday_end_minutes": Config.WORKDAY_END,
    "grace_late_minutes": Config.GRACE_LATE_MINUTES,
    "grace_early_minutes": Config.GRACE_EARLY_MINUTES,
}

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
LOG_LEVEL = Config.LOG_LEVEL
