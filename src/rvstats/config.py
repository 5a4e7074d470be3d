from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rvstats.store import MergePolicy

DEFAULT_LISTING_URL = "http://64.225.54.237:8080/servers"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RVSTATS_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    listing_url: str = DEFAULT_LISTING_URL
    listing_timeout_seconds: float = 10.0
    poll_interval_seconds: int = 30
    beacon_port_offset: int = 1000
    beacon_timeout_seconds: float = 5.0
    merge_policy: MergePolicy = MergePolicy.RETAIN
    web_dir: Path = Path("web")

    @field_validator(
        "listing_timeout_seconds",
        "poll_interval_seconds",
        "beacon_timeout_seconds",
    )
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("intervals and timeouts must be > 0")
        return value

    @field_validator("merge_policy", mode="before")
    @classmethod
    def _parse_policy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


settings = Settings()
