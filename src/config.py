from __future__ import annotations

from functools import cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class AppSettings(BaseSettings):
    listings_file: Path = Path("LISTINGS.TXT")
    changes_file: Path = Path("CHANGES.TXT")
    # None means the ledger grows without a limit.
    max_listings: int | None = None
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@cache
def config() -> AppSettings:
    return AppSettings()
