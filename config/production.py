import os

from config.config import ATTENDANCE_POLICY  # noqa: F401

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
