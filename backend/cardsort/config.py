"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a CARDSORT_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - category_count / category_size feed GameRules; nothing else hardcodes 45

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - dataset_path unset means "generate a synthetic deck": works out-of-the-box
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cardsort.core.domain_types import (
    GameRules, DEFAULT_CATEGORY_COUNT, DEFAULT_CATEGORY_SIZE,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CARDSORT_", case_sensitive=False,
    )

    # Dataset
    dataset_path: str | None = None
    strict_dataset: bool = True
    category_count: int = Field(DEFAULT_CATEGORY_COUNT, ge=1)
    category_size: int = Field(DEFAULT_CATEGORY_SIZE, ge=2)
    # Fixed seed gives a reproducible deal; None draws from OS entropy
    shuffle_seed: int | None = None
    # Live games kept in memory; the oldest are evicted past this
    max_games: int = Field(1000, ge=1)

    @field_validator("dataset_path", mode="before")
    @classmethod
    def blank_path_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # API
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def rules(self) -> GameRules:
        return GameRules(
            category_count=self.category_count,
            category_size=self.category_size,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
