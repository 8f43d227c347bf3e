"""Application configuration via pydantic-settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Storage: "memory" keeps everything in process, "duckdb" persists to database_path
    storage_backend: Literal["memory", "duckdb"] = "memory"
    database_path: str = "data/cricket_pro.duckdb"

    # What deleting a referenced team does: "reject" (409) or "cascade"
    team_delete_policy: Literal["reject", "cascade"] = "reject"

    # Sync client
    api_base_url: str = "http://127.0.0.1:8000"
    local_store_path: str = "data/local_store.json"
    seed_default_teams: bool = False
    request_timeout: float = 10.0


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the app and scripts."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
