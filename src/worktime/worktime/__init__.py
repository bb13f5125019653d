"""Worktime package.

Attendance tracking organized by feature modules (metrics, attendance,
corrections, payroll, ...) with SOLID service/repository layers. The
attendance metrics calculator in ``metrics.calculator`` is the shared policy
core every feature recomputes through.
"""
