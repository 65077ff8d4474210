"""
Application configuration loaded from environment variables.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the catalog manager service."""

    project_name: str = Field(default="Dynamic Catalog Manager", description="Human readable name.")
    catalog_dir: Path = Field(default=Path("etc/catalog"), description="Directory holding <name>.properties files.")
    disabled_catalogs: list[str] = Field(
        default_factory=list, description="Catalog names that are never mounted."
    )
    create_catalog_dir: bool = Field(default=True, description="Create the catalog directory on startup.")
    api_prefix: str = Field(default="/presto/catalog/api", description="Prefix for the catalog admin routes.")
    allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ],
        description="List of origins allowed for CORS.",
    )

    # Watcher
    watcher_polling: bool = Field(default=False, description="Use the polling observer instead of native events.")
    watcher_poll_interval: float = Field(default=1.0, description="Polling observer interval in seconds.")

    log_level: str = Field(default="INFO", description="Root log level.")

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_MANAGER_",
        extra="ignore",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
