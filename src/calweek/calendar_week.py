"""ISO-8601 calendar weeks.

Weeks start on Monday. Week 1 of a year is the week containing that year's
first Thursday, so the first days of January can belong to the last week of
the previous ISO year and the last days of December to week 1 of the next.

Ways January 1st lands in the last week of the previous year::

                                                    Sun  1
    Mon  2, Tue  3, Wed  4, Thu  5, Fri  6, Sat  7, Sun  8   <- week 1

                                            Sat  1, Sun  2
    Mon  3, Tue  4, Wed  5, Thu  6, Fri  7, Sat  8, Sun  9   <- week 1

                                    Fri  1, Sat  2, Sun  3
    Mon  4, Tue  5, Wed  6, Thu  7, Fri  8, Sat  9, Sun 10   <- week 1

Ways January 1st is in week 1::

    Mon 29, Tue 30, Wed 31, Thu  1, Fri  2, Sat  3, Sun  4
    Mon 30, Tue 31, Wed  1, Thu  2, Fri  3, Sat  4, Sun  5
    Mon 31, Tue  1, Wed  2, Thu  3, Fri  4, Sat  5, Sun  6
    Mon  1, Tue  2, Wed  3, Thu  4, Fri  5, Sat  6, Sun  7
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .calendar_date import CalendarDate


@dataclass(frozen=True, order=True, repr=False, init=False)
class CalendarWeek:
    year: int
    week: int
    first_date: CalendarDate = field(compare=False)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        # Also reached through dataclasses.replace()
        raise TypeError("CalendarWeek values are built with CalendarWeek.from_calendar_date()")

    @classmethod
    def _build(cls, year: int, week: int, first_date: CalendarDate) -> "CalendarWeek":
        inst = object.__new__(cls)
        object.__setattr__(inst, "year", year)
        object.__setattr__(inst, "week", week)
        object.__setattr__(inst, "first_date", first_date)
        return inst

    @classmethod
    def from_calendar_date(cls, calendar_date: CalendarDate) -> "CalendarWeek":
        # Every ISO week has exactly one Thursday, and it sits in the ISO year
        # of the whole week. Sunday counts as day 7 here.
        days_to_thursday = 4 - (calendar_date.day_of_week or 7)  # in [-3, +3]
        thursday = calendar_date.add_days(days_to_thursday)

        year = thursday.year
        new_years_day = CalendarDate(year, 0, 1)
        first_thursday = new_years_day.add_days(thursday.days_since(new_years_day) % 7)

        return cls._build(
            year,
            thursday.days_since(first_thursday) // 7 + 1,
            thursday.add_days(-3),
        )

    @property
    def last_date(self) -> CalendarDate:
        """The Sunday closing this week."""
        return self.first_date.add_days(6)

    def dates(self) -> List[CalendarDate]:
        return [self.first_date.add_days(i) for i in range(7)]

    def add_weeks(self, n: int) -> "CalendarWeek":
        # Derived again from a date so 52/53-week years need no special case
        return CalendarWeek.from_calendar_date(self.first_date.add_days(7 * n))

    def compare_to(self, other: "CalendarWeek") -> int:
        return (self.year - other.year) or (self.week - other.week)

    def __str__(self) -> str:
        return f"{self.year:04d}-W{self.week:02d}"

    def __repr__(self) -> str:
        return f"<CalendarWeek {self}>"
