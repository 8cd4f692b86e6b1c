"""Tests for engine settings and environment configuration."""

from datetime import datetime
from pathlib import Path

import pytest
from fundraising_advisor.config import EngineSettings, get_data_dir, load_settings

ENV_VARS = (
    "FUNDRAISING_ADVISOR_CURRENCY_PER_USD",
    "FUNDRAISING_ADVISOR_CURRENT_YEAR",
    "FUNDRAISING_ADVISOR_TOP_N",
    "FUNDRAISING_ADVISOR_DATA_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestEngineSettings:
    def test_defaults(self):
        settings = EngineSettings()
        assert settings.local_currency_per_usd == 75.0
        assert settings.top_n == 5
        assert settings.current_year is None
        assert (settings.data_dir / "strategies.yaml").exists()

    def test_resolve_year(self):
        assert EngineSettings(current_year=2030).resolve_year() == 2030
        assert EngineSettings().resolve_year() == datetime.now().year

    @pytest.mark.parametrize("factor", [0, -1.5])
    def test_rejects_non_positive_currency(self, factor):
        with pytest.raises(ValueError, match="local_currency_per_usd"):
            EngineSettings(local_currency_per_usd=factor)

    def test_rejects_zero_top_n(self):
        with pytest.raises(ValueError, match="top_n"):
            EngineSettings(top_n=0)


class TestLoadSettings:
    def test_defaults_without_env(self):
        assert load_settings() == EngineSettings()

    def test_reads_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FUNDRAISING_ADVISOR_CURRENCY_PER_USD", "83.5")
        monkeypatch.setenv("FUNDRAISING_ADVISOR_CURRENT_YEAR", "2024")
        monkeypatch.setenv("FUNDRAISING_ADVISOR_TOP_N", " 3 ")
        monkeypatch.setenv("FUNDRAISING_ADVISOR_DATA_DIR", str(tmp_path))

        settings = load_settings()
        assert settings.local_currency_per_usd == 83.5
        assert settings.current_year == 2024
        assert settings.top_n == 3
        assert settings.data_dir == tmp_path.resolve()

    def test_blank_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("FUNDRAISING_ADVISOR_TOP_N", "")
        assert load_settings().top_n == 5

    def test_invalid_value_names_variable(self, monkeypatch):
        monkeypatch.setenv("FUNDRAISING_ADVISOR_CURRENT_YEAR", "next year")
        with pytest.raises(ValueError, match="FUNDRAISING_ADVISOR_CURRENT_YEAR"):
            load_settings()

    def test_invalid_range_rejected(self, monkeypatch):
        monkeypatch.setenv("FUNDRAISING_ADVISOR_CURRENCY_PER_USD", "-1")
        with pytest.raises(ValueError, match="local_currency_per_usd"):
            load_settings()


class TestDataDir:
    def test_packaged_default(self):
        expected = Path(__file__).parent.parent / "fundraising_advisor" / "data"
        assert get_data_dir().resolve() == expected.resolve()

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FUNDRAISING_ADVISOR_DATA_DIR", str(tmp_path))
        assert get_data_dir() == tmp_path.resolve()
