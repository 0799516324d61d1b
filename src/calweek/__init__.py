"""
calweek: immutable Gregorian calendar dates and ISO-8601 weeks.

``CalendarDate`` holds a validated (year, month0, day1) triple on or after
1582-10-15; ``CalendarWeek`` is derived from it with the ISO week-numbering
rules.
"""

from .calendar_date import CalendarDate
from .calendar_week import CalendarWeek
from .errors import CalendarError, InvalidCalendarDate, OutOfRange

__all__ = [
    "CalendarDate",
    "CalendarWeek",
    "CalendarError",
    "InvalidCalendarDate",
    "OutOfRange",
]
