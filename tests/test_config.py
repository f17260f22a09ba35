import logging

from treasury import logging_setup
from treasury.config import ALL_YEARS, CURRENT_YEAR, load_settings, year_choices

ENV_VARS = (
    "TREASURY_SEED_PATH",
    "TREASURY_CURRENCY",
    "TREASURY_DEFAULT_YEAR",
    "TREASURY_YEARS_BACK",
    "TREASURY_LOG_LEVEL",
)


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    settings = load_settings(tmp_path / ".env")

    assert settings.seed_path == "data/seed.json"
    assert settings.currency == "MZN"
    assert settings.default_year == CURRENT_YEAR
    assert settings.years_back == 5


def test_env_overrides(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.setenv("TREASURY_CURRENCY", "EUR")
    monkeypatch.setenv("TREASURY_DEFAULT_YEAR", "ALL")
    monkeypatch.setenv("TREASURY_YEARS_BACK", "3")

    settings = load_settings(tmp_path / ".env")

    assert settings.currency == "EUR"
    assert settings.default_year == ALL_YEARS
    assert settings.years_back == 3


def test_invalid_values_fall_back(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.setenv("TREASURY_DEFAULT_YEAR", "last")
    monkeypatch.setenv("TREASURY_YEARS_BACK", "many")

    settings = load_settings(tmp_path / ".env")

    assert settings.default_year == CURRENT_YEAR
    assert settings.years_back == 5


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    # register the variable with monkeypatch so the value set by dotenv is undone
    monkeypatch.setenv("TREASURY_SEED_PATH", "placeholder")
    monkeypatch.delenv("TREASURY_SEED_PATH")
    env_file = tmp_path / ".env"
    env_file.write_text("TREASURY_SEED_PATH=/tmp/other.json\n", encoding="utf-8")

    settings = load_settings(env_file)

    assert settings.seed_path == "/tmp/other.json"


def test_year_choices_newest_first():
    assert year_choices(2025, 3) == [2025, 2024, 2023]


def test_parse_level():
    assert logging_setup._parse_level("debug") == logging.DEBUG
    assert logging_setup._parse_level("10") == 10
    assert logging_setup._parse_level(logging.WARNING) == logging.WARNING
    assert logging_setup._parse_level("nonsense") == logging.INFO
