"""Configuration — every tunable read from the environment (or .env) by pydantic-settings.

Invariants:
    - get_settings() is cached: one Settings per process; tests set env vars before import
    - database_url always names an async driver (postgresql:// is rewritten to asyncpg)
    - jwt_secret must be overridden outside development; the default only signs local tokens
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str = "postgresql+asyncpg://devlink:devlink@db:5432/devlink"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    storage_timeout_seconds: float = 5.0

    # Bearer tokens (10 hours)
    jwt_secret: str = "devlink-dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_seconds: int = 36_000

    # GitHub repository lookups
    github_client_id: str | None = None
    github_client_secret: str | None = None
    github_timeout_seconds: float = 10.0

    cors_origins: list[str] = ["http://localhost:3000"]

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
