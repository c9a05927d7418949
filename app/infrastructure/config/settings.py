"""Application settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    database_url: str = "sqlite:///./leads.db"
    default_sector_name: Optional[str] = None  # Falls back to the oldest sector when unset
    duplicate_check_chunk_size: int = 500
    pool_leads_page_size: int = 50
    idempotency_enabled: bool = False
    redis_url: str = "redis://localhost:6379/0"
    idempotency_ttl_seconds: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
