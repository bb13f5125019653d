import os

from config.config import ATTENDANCE_POLICY  # noqa: F401

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
