"""Attendance Dashboard package.

Organized by feature modules (attendance, reports, corrections, users, ...)
with a thin Flask controller layer over service/repository layers. All data
comes from the external attendance/report service through ``gateway``.
"""
