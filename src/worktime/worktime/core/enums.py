from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ORG_ADMIN = "ORG_ADMIN"
    SUPERADMIN = "SUPERADMIN"


class AttendanceStatus(str, Enum):
    """Day classification stored on an attendance record."""

    PRESENT = "PRESENT"
    HALF = "HALF"
    ABSENT = "ABSENT"
    LEAVE = "LEAVE"


class BreakType(str, Enum):
    ORDINARY = "ORDINARY"
    EXTERNAL = "EXTERNAL"


class ClockAction(str, Enum):
    CLOCK_IN = "clock-in"
    CLOCK_OUT = "clock-out"
    BREAK_IN = "break-in"
    BREAK_OUT = "break-out"


class CorrectionKind(str, Enum):
    CLOCK = "CLOCK"
    BREAK = "BREAK"


class CorrectionStatus(str, Enum):
    """Two-step approval flow: manager first, org admin may finalize."""

    PENDING = "PENDING"
    MANAGER_APPROVED = "MANAGER_APPROVED"
    ADMIN_APPROVED = "ADMIN_APPROVED"
    REJECTED = "REJECTED"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
