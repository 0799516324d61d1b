from pathlib import Path

import pandas as pd
import pytest

from calweek.dim_week import DIM_WEEK_COLUMNS, build_iso_dim_week, derive_week_column, write_dim_week


def _sample_rows() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "vendor_code": ["V1", "V1", "V2", "V2", "V3"],
            "week_start": [
                "2025-10-06",  # ISO week 41
                "2025-10-13",  # ISO week 42
                "2024-12-30",  # ISO 2025-W01
                "not a date",
                None,
            ],
        }
    )


def test_build_iso_dim_week_shape_and_columns():
    df = build_iso_dim_week(2019, 2021)
    assert list(df.columns) == DIM_WEEK_COLUMNS
    # 2019: 52 weeks, 2020: 53 weeks, 2021: 52 weeks
    assert df.groupby("iso_year")["iso_week"].max().to_dict() == {2019: 52, 2020: 53, 2021: 52}
    assert len(df) == 157
    assert df["week_id"].is_unique


def test_build_iso_dim_week_first_and_last_rows():
    df = build_iso_dim_week(2009, 2009)
    first = df.iloc[0]
    last = df.iloc[-1]
    assert first["week_id"] == "2009-W01"
    assert first["week_start"] == pd.Timestamp("2008-12-29")
    assert first["week_end"] == pd.Timestamp("2009-01-04")
    assert first["month_label"] == "Jan 2009"
    assert first["quarter_label"] == "Q1"
    assert first["display_label"] == "2009 Week 01"
    assert last["week_id"] == "2009-W53"
    assert last["week_end"] == pd.Timestamp("2010-01-03")
    assert last["month_number"] == 12


def test_build_iso_dim_week_weeks_start_on_monday():
    df = build_iso_dim_week(2024, 2025)
    assert (df["week_start"].dt.weekday == 0).all()
    assert (df["week_end"] - df["week_start"]).eq(pd.Timedelta(days=6)).all()


def test_build_iso_dim_week_rejects_inverted_range():
    with pytest.raises(ValueError):
        build_iso_dim_week(2030, 2020)


def test_write_dim_week_csv(tmp_path: Path):
    df = build_iso_dim_week(2025, 2025)
    path = write_dim_week(df, tmp_path / "ref" / "dim_week.csv")
    assert path.exists()
    back = pd.read_csv(path, dtype="string")
    assert back.loc[0, "week_id"] == "2025-W01"
    assert back.loc[0, "week_start"] == "2024-12-30"
    assert len(back) == 52


def test_write_dim_week_xlsx(tmp_path: Path):
    df = build_iso_dim_week(2025, 2025)
    path = write_dim_week(df, tmp_path / "dim_week.xlsx")
    assert path.exists()
    back = pd.read_excel(path, sheet_name="dim_week", dtype=str)
    assert back.loc[51, "week_id"] == "2025-W52"


def test_write_dim_week_rejects_unknown_suffix(tmp_path: Path):
    with pytest.raises(ValueError):
        write_dim_week(build_iso_dim_week(2025, 2025), tmp_path / "dim_week.json")


def test_derive_week_column():
    out = derive_week_column(_sample_rows())
    assert out.loc[0, "week_id"] == "2025-W41"
    assert out.loc[1, "week_id"] == "2025-W42"
    assert out.loc[2, "week_id"] == "2025-W01"
    assert pd.isna(out.loc[3, "week_id"])
    assert pd.isna(out.loc[4, "week_id"])
    # input is untouched
    assert "week_id" not in _sample_rows().columns


def test_derive_week_column_custom_names_and_timestamps():
    df = pd.DataFrame({"day": pd.to_datetime(["2006-06-27", "2010-01-01"])})
    out = derive_week_column(df, date_col="day", out_col="iso_week")
    assert out["iso_week"].tolist() == ["2006-W26", "2009-W53"]


def test_derive_week_column_missing_column():
    with pytest.raises(ValueError):
        derive_week_column(pd.DataFrame({"x": [1]}))
