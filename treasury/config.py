"""Settings for the treasury app, read from the environment and ``.env``."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from treasury.logging_setup import get_logger

logger = get_logger(__name__)

CURRENT_YEAR = "current"
ALL_YEARS = "all"


@dataclass(frozen=True)
class Settings:
    seed_path: str
    currency: str
    default_year: str  # "current" or "all"
    years_back: int
    log_level: str


def load_settings(env_path: Optional[Path] = None) -> Settings:
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded configuration from %s", env_path)
    else:
        logger.debug("No .env file at %s, using environment only", env_path)

    default_year = os.getenv("TREASURY_DEFAULT_YEAR", CURRENT_YEAR).strip().lower()
    if default_year not in (CURRENT_YEAR, ALL_YEARS):
        logger.warning("Invalid TREASURY_DEFAULT_YEAR %r, using %r", default_year, CURRENT_YEAR)
        default_year = CURRENT_YEAR

    try:
        years_back = int(os.getenv("TREASURY_YEARS_BACK", 5))
    except ValueError:
        logger.warning("TREASURY_YEARS_BACK is not an integer, using 5")
        years_back = 5

    return Settings(
        seed_path=os.getenv("TREASURY_SEED_PATH", "data/seed.json"),
        currency=os.getenv("TREASURY_CURRENCY", "MZN"),
        default_year=default_year,
        years_back=max(1, years_back),
        log_level=os.getenv("TREASURY_LOG_LEVEL", "INFO"),
    )


def year_choices(current_year: int, years_back: int) -> list:
    """Years offered in the year selectors, newest first."""
    return [current_year - i for i in range(years_back)]
