"""Timeclock keys package.

Organized by feature modules (turns, schedules, marks, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers that read and
write one persisted state document.
"""
