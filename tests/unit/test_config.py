from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from calweek.config import CONFIG_ENV_VAR, CalweekConfig, load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "calweek.yaml"
    path.write_text(dedent(text), encoding="utf-8")
    return path


def test_defaults_without_path(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    cfg = load_config()
    assert cfg == CalweekConfig()
    assert cfg.log_level == "INFO"
    assert cfg.paths.logs_dir is None
    assert (cfg.dim_week.start_year, cfg.dim_week.end_year) == (2018, 2030)


def test_load_explicit_file(tmp_path: Path):
    path = _write(
        tmp_path,
        """
        log_level: DEBUG
        paths:
          logs_dir: logs
        dim_week:
          start_year: 2000
          end_year: 2001
          output_path: out/weeks.xlsx
        """,
    )
    cfg = load_config(path)
    assert cfg.log_level == "DEBUG"
    assert cfg.paths.logs_dir == "logs"
    assert cfg.dim_week.start_year == 2000
    assert cfg.dim_week.output_path == "out/weeks.xlsx"


def test_env_var_is_used(tmp_path: Path, monkeypatch):
    path = _write(tmp_path, "log_level: WARNING\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().log_level == "WARNING"


def test_empty_file_yields_defaults(tmp_path: Path):
    assert load_config(_write(tmp_path, "")) == CalweekConfig()


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "log_level: CHATTY\n",
        "dim_week:\n  start_year: 1582\n",
        "dim_week:\n  end_year: 9999\n",
        "dim_week:\n  start_year: 2030\n  end_year: 2020\n",
    ],
)
def test_invalid_documents_raise(tmp_path: Path, text: str):
    with pytest.raises(ValidationError):
        load_config(_write(tmp_path, text))
