"""Gregorian calendar dates as immutable values.

A ``CalendarDate`` is a ``(year, month0, day1)`` triple: the month is
zero-based (0 = January) and the day is one-based. Dates are checked by
normalizing the parts with rollover and comparing the result back against
the inputs, so 31 April or 29 February 2006 are rejected without a
days-in-month table.

The first representable day is 1582-10-15, the first day of the Gregorian
calendar.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from numbers import Integral, Real
from typing import TYPE_CHECKING, Optional, Union

from .errors import InvalidCalendarDate, OutOfRange

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .calendar_week import CalendarWeek


LOGGER = logging.getLogger(__name__)

# "the Julian calendar day Thursday, 4 October 1582 was followed by the first
# day of the Gregorian calendar, Friday, 15 October 1582"
FIRST_VALID_PARTS = (1582, 9, 15)

Timestamp = Union[datetime, date, Real]


def _is_number(part: object) -> bool:
    return isinstance(part, Real) and not isinstance(part, bool)


def _is_integral(part: Real) -> bool:
    return isinstance(part, Integral) or float(part).is_integer()


def _normalize(year: int, month0: int, day1: int) -> datetime:
    """Return UTC midnight for the parts, rolling over months and days."""
    carry, month_index = divmod(month0, 12)
    first_of_month = datetime(year + carry, month_index + 1, 1, tzinfo=timezone.utc)
    return first_of_month + timedelta(days=day1 - 1)


@dataclass(frozen=True, order=True, repr=False)
class CalendarDate:
    year: int
    month0: int
    day1: int
    _midnight_utc: datetime = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        parts = (self.year, self.month0, self.day1)
        if not all(_is_number(p) for p in parts):
            LOGGER.debug("Rejected %r: non-numeric part", parts)
            raise InvalidCalendarDate(f"Arguments out of range: {parts!r} has a non-numeric part")
        if parts < FIRST_VALID_PARTS:
            LOGGER.debug("Rejected %r: before the Gregorian calendar", parts)
            raise OutOfRange(f"Date is out of bounds: {parts} precedes 1582-10-15")
        if not all(_is_integral(p) for p in parts):
            LOGGER.debug("Rejected %r: non-integral part", parts)
            raise InvalidCalendarDate(f"Arguments out of range: {parts} has a non-integral part")

        year, month0, day1 = (int(p) for p in parts)
        try:
            midnight = _normalize(year, month0, day1)
        except (ValueError, OverflowError) as exc:
            if 0 <= month0 <= 11 and 1 <= day1 <= 31:
                # Well-formed parts: only the year can be past the host range
                raise OutOfRange(f"Date is out of bounds: {parts} ({exc})") from exc
            LOGGER.debug("Rejected %r: does not normalize (%s)", parts, exc)
            raise InvalidCalendarDate(f"Arguments out of range: {parts} is not a calendar day") from exc

        if (midnight.year, midnight.month - 1, midnight.day) != (year, month0, day1):
            LOGGER.debug("Rejected %r: normalizes to %s", parts, midnight.date().isoformat())
            raise InvalidCalendarDate(f"Arguments out of range: {parts} is not a calendar day")

        # numpy integers and integral floats are stored as plain ints
        object.__setattr__(self, "year", year)
        object.__setattr__(self, "month0", month0)
        object.__setattr__(self, "day1", day1)
        object.__setattr__(self, "_midnight_utc", midnight)

    # -----------------------------
    # Factories
    # -----------------------------

    @classmethod
    def from_local_date(cls, value: Timestamp) -> "CalendarDate":
        """Build from the local wall-clock fields of a datetime or POSIX timestamp.

        Naive datetimes and plain dates are taken as already local.
        """
        if isinstance(value, datetime):
            local = value.astimezone() if value.tzinfo is not None else value
        elif isinstance(value, date):
            local = value
        else:
            local = datetime.fromtimestamp(value)
        return cls(local.year, local.month - 1, local.day)

    @classmethod
    def from_utc_date(cls, value: Timestamp) -> "CalendarDate":
        """Build from the UTC fields of a datetime or POSIX timestamp.

        Naive datetimes follow Python's convention and are read as local time
        before conversion; plain dates contribute their fields unchanged.
        """
        if isinstance(value, datetime):
            utc = value.astimezone(timezone.utc)
        elif isinstance(value, date):
            utc = value
        else:
            utc = datetime.fromtimestamp(value, timezone.utc)
        return cls(utc.year, utc.month - 1, utc.day)

    @classmethod
    def from_year_month0_day(cls, year: int, month0: int, day1: int) -> "CalendarDate":
        return cls(year, month0, day1)

    @classmethod
    def from_year_month1_day(cls, year: int, month1: int, day1: int) -> "CalendarDate":
        return cls(year, month1 - 1, day1)

    # -----------------------------
    # Derived values
    # -----------------------------

    @property
    def day_of_week(self) -> int:
        """0 = Sunday ... 6 = Saturday."""
        return self._midnight_utc.isoweekday() % 7

    @property
    def calendar_week(self) -> "CalendarWeek":
        # Lazy import: calendar_week depends on this module
        from .calendar_week import CalendarWeek

        return CalendarWeek.from_calendar_date(self)

    def set_parts(
        self,
        *,
        year: Optional[int] = None,
        month0: Optional[int] = None,
        day1: Optional[int] = None,
    ) -> "CalendarDate":
        """Return a copy with the given parts replaced; the result is validated again."""
        return CalendarDate.from_year_month0_day(
            self.year if year is None else year,
            self.month0 if month0 is None else month0,
            self.day1 if day1 is None else day1,
        )

    def add_days(self, n: int) -> "CalendarDate":
        try:
            shifted = self._midnight_utc + timedelta(days=n)
        except OverflowError as exc:
            raise OutOfRange(f"Date is out of bounds: {self} + {n} days") from exc
        return CalendarDate.from_utc_date(shifted)

    def days_since(self, other: "CalendarDate") -> int:
        """Signed whole days from ``other`` to ``self``."""
        return (self._midnight_utc - other._midnight_utc).days

    def compare_to(self, other: "CalendarDate") -> int:
        return (
            (self.year - other.year)
            or (self.month0 - other.month0)
            or (self.day1 - other.day1)
        )

    # -----------------------------
    # Conversions
    # -----------------------------

    def to_midnight_utc(self) -> datetime:
        return self._midnight_utc

    def to_midnight_local(self) -> datetime:
        """Local midnight as an aware datetime.

        Around DST transitions the result is whatever the platform's local
        time conversion produces for a missing or repeated midnight.
        """
        return datetime(self.year, self.month0 + 1, self.day1).astimezone()

    def to_date(self) -> date:
        return self._midnight_utc.date()

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month0 + 1:02d}-{self.day1:02d}"

    def __repr__(self) -> str:
        if "_midnight_utc" not in self.__dict__:
            # Construction was rejected before the parts were validated
            return f"<CalendarDate unvalidated {self.year!r}, {self.month0!r}, {self.day1!r}>"
        return f"<CalendarDate {self}>"
