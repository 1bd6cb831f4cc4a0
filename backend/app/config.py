"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Catalog Categories"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/categories.sqlite"

    # Key checked before create/rename; writes are refused while unset
    admin_api_key: Optional[str] = None

    # Cached tree views, dropped after every successful mutation
    view_cache_enabled: bool = True
    view_cache_max_entries: int = 256

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
