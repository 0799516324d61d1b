"""ISO week dimension (dim_week) builder and week-key derivation.

This module produces a weekly calendar with exactly one row per ISO week
(Monday to Sunday) and helpers to tag dated rows with their ISO week.

Columns:
- iso_year (int)
- iso_week (int)
- week_id (str, format YYYY-Www)
- week_start (datetime64[ns], the Monday)
- week_end (datetime64[ns], the Sunday)
- month_number (int): from the week's Thursday
- month_label (str): e.g. "Jun 2006"
- quarter_label (str): e.g. "Q2"
- display_label (str): e.g. "2006 Week 26"

Month and quarter come from the Thursday, which always lies in the week's
ISO year.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from .calendar_date import CalendarDate
from .calendar_week import CalendarWeek
from .errors import CalendarError


LOGGER = logging.getLogger(__name__)

DIM_WEEK_COLUMNS = [
    "iso_year",
    "iso_week",
    "week_id",
    "week_start",
    "week_end",
    "month_number",
    "month_label",
    "quarter_label",
    "display_label",
]


def _first_week_of_iso_year(year: int) -> CalendarWeek:
    # January 4th is always in week 1
    return CalendarDate(year, 0, 4).calendar_week


def _week_row(week: CalendarWeek) -> dict[str, Any]:
    thursday = week.first_date.add_days(3).to_date()
    return {
        "iso_year": week.year,
        "iso_week": week.week,
        "week_id": str(week),
        "week_start": pd.Timestamp(week.first_date.to_date()),
        "week_end": pd.Timestamp(week.last_date.to_date()),
        "month_number": thursday.month,
        "month_label": thursday.strftime("%b %Y"),
        "quarter_label": f"Q{((thursday.month - 1) // 3) + 1}",
        "display_label": f"{week.year} Week {week.week:02d}",
    }


def build_iso_dim_week(start_year: int = 2018, end_year: int = 2030) -> pd.DataFrame:
    """Build an ISO week calendar covering ISO years ``start_year``..``end_year``.

    Raises:
        ValueError: if ``end_year < start_year``.
        OutOfRange: if the range reaches outside the representable calendar.
    """
    if end_year < start_year:
        raise ValueError("end_year must be >= start_year")

    rows: list[dict[str, Any]] = []
    week = _first_week_of_iso_year(start_year)
    while week.year <= end_year:
        rows.append(_week_row(week))
        week = week.add_weeks(1)

    df = pd.DataFrame(rows, columns=DIM_WEEK_COLUMNS)

    # Validations
    if not df["week_id"].is_unique:
        raise AssertionError("Duplicate week_id in generated calendar")
    if not (df["week_end"] - df["week_start"]).eq(pd.Timedelta(days=6)).all():
        raise AssertionError("Non 7-day weeks detected in generated calendar")
    for iso_year, weeks in df.groupby("iso_year")["iso_week"]:
        if weeks.tolist() != list(range(1, len(weeks) + 1)):
            raise AssertionError(f"Week numbers are not consecutive for ISO year {iso_year}")

    LOGGER.info("Built ISO dim_week for %d-%d: %d weeks", start_year, end_year, len(df))
    return df


def write_dim_week(df: pd.DataFrame, path: str | Path) -> Path:
    """Write a dim_week frame to ``.csv`` or ``.xlsx``; dates are written as ISO strings."""
    out_path = Path(path)
    suffix = out_path.suffix.lower()
    if suffix not in (".csv", ".xlsx"):
        raise ValueError(f"Unsupported dim_week output format: {out_path.name} (expected .csv or .xlsx)")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out = df.copy()
    for col in ("week_start", "week_end"):
        out[col] = pd.to_datetime(out[col]).dt.strftime("%Y-%m-%d")

    if suffix == ".xlsx":
        out.to_excel(out_path, index=False, sheet_name="dim_week", engine="openpyxl")
    else:
        out.to_csv(out_path, index=False)
    LOGGER.info("Wrote %d weeks to %s", len(out), out_path)
    return out_path


def _week_key(value: Any) -> Any:
    if pd.isna(value):
        return pd.NA
    try:
        return str(CalendarDate.from_year_month1_day(value.year, value.month, value.day).calendar_week)
    except CalendarError:
        return pd.NA


def derive_week_column(df: pd.DataFrame, date_col: str = "week_start", out_col: str = "week_id") -> pd.DataFrame:
    """Attach ``out_col`` holding the ISO week (``YYYY-Www``) of each date in ``date_col``.

    Rows whose date cannot be parsed, or which the calendar rejects, get NA.
    """
    if date_col not in df.columns:
        raise ValueError(f"Cannot derive week keys; date column missing: {date_col}")

    out = df.copy()
    dates = pd.to_datetime(out[date_col], errors="coerce")
    keys = pd.Series([_week_key(d) for d in dates], index=out.index, dtype="string")
    out[out_col] = keys

    unmapped = int(keys.isna().sum())
    if unmapped:
        LOGGER.info("Week keys: %d of %d rows in '%s' could not be mapped", unmapped, len(out), date_col)
    else:
        LOGGER.info("Week keys: mapped %d rows from '%s'", len(out), date_col)
    return out
