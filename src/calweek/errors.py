"""Errors raised when a calendar value cannot be built."""
from __future__ import annotations


class CalendarError(ValueError):
    """Base class for calendar construction failures."""


class OutOfRange(CalendarError):
    """The date precedes 1582-10-15 or lies outside the host date range."""


class InvalidCalendarDate(CalendarError):
    """The (year, month, day) parts do not name a real calendar day."""
