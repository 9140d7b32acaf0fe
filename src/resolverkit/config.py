"""
Configuration management for resolverkit
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RESOLVERKIT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Resolver defaults
    primary_key_field: str = "id"
    viewer_context_key: str = "viewer"

    # Database (used by the SQLAlchemy store helpers)
    database_url: str = "sqlite+aiosqlite:///./resolverkit.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20
    sql_echo: bool = False

    # Logging
    debug: bool = False
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
