"""Configuration loading and validation for calweek.

Configuration is a small YAML document validated with pydantic::

    log_level: INFO
    paths:
      logs_dir: logs
    dim_week:
      start_year: 2018
      end_year: 2030
      output_path: data/reference/iso_dim_week.csv
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


CONFIG_ENV_VAR = "CALWEEK_CONFIG"


class PathsConfig(BaseModel):
    """Filesystem locations."""

    logs_dir: Optional[str] = Field(None, description="Directory for calweek.log; console only when unset")


class DimWeekConfig(BaseModel):
    """Defaults for the ISO week dimension export."""

    # ISO year 1582 cannot be built: its New Year's Day precedes the Gregorian calendar
    start_year: int = Field(2018, ge=1583, description="First ISO year in the table")
    end_year: int = Field(2030, le=9998, description="Last ISO year in the table")
    output_path: str = Field(
        str(Path("data") / "reference" / "iso_dim_week.csv"),
        description="Target file (.csv or .xlsx)",
    )

    @model_validator(mode="after")
    def validate_year_range(self):
        if self.end_year < self.start_year:
            raise ValueError("dim_week.end_year must be >= dim_week.start_year")
        return self


class CalweekConfig(BaseModel):
    """Complete calweek configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", description="Logger level")
    paths: PathsConfig = Field(default_factory=PathsConfig)
    dim_week: DimWeekConfig = Field(default_factory=DimWeekConfig)


def load_config(path: str | Path | None = None) -> CalweekConfig:
    """Load configuration from ``path``, ``$CALWEEK_CONFIG``, or defaults.

    Raises:
        FileNotFoundError: if an explicitly requested file does not exist.
        pydantic.ValidationError: if the document does not validate.
    """
    if path is None:
        env = os.environ.get(CONFIG_ENV_VAR)
        if not env:
            return CalweekConfig()
        path = env

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"calweek config not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return CalweekConfig.model_validate(raw)
