"""Library configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Every field can be set with a ``STATEMENT_PARSER_`` prefixed variable
    (e.g. ``STATEMENT_PARSER_YEAR_PREFIX=19``) or from a local ``.env`` file.
    Explicit arguments passed to a parser always win over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATEMENT_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Parsing
    YEAR_PREFIX: int = 20  # two-digit years are read as 20xx
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Batch parsing
    MAX_WORKERS: int = 4


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
