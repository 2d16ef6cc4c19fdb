"""
Unit tests for testament.settings
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from testament.settings import Settings, default_db_file
from testament.validation import MIN_CHECK_IN_PERIOD, InputPolicy


def test_defaults():
    s = Settings()
    assert s.input_policy is InputPolicy.CLAMP
    assert s.default_check_in_period == MIN_CHECK_IN_PERIOD
    assert s.db_url.startswith("sqlite:///")


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("TESTAMENT_INPUT_POLICY", "strict")
    monkeypatch.setenv("TESTAMENT_DEFAULT_CHECK_IN_PERIOD", "5000000")
    s = Settings()
    assert s.input_policy is InputPolicy.STRICT
    assert s.default_check_in_period == 5_000_000


@pytest.mark.parametrize("period", [60, 31_536_001])
def test_default_period_must_be_in_bounds(period):
    with pytest.raises(ValidationError):
        Settings(default_check_in_period=period)


def test_unknown_policy_rejected():
    with pytest.raises(ValidationError):
        Settings(input_policy="lenient")


def test_db_file_defaults_to_working_directory(monkeypatch, tmp_path):
    import testament

    monkeypatch.delenv("TESTAMENT_DB_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    path = default_db_file()
    assert path == tmp_path / "testament.db"
    package_dir = Path(testament.__file__).resolve().parent
    assert package_dir.parent not in path.parents


def test_db_file_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("TESTAMENT_DB_FILE", str(tmp_path / "wills.db"))
    assert default_db_file() == tmp_path / "wills.db"
