from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PAYMENTS_", case_sensitive=False)

    # Logging settings (stdout carries the account table, logs go to stderr)
    log_level: str = "WARNING"
    log_format: str = "%(levelname)s: %(message)s"

    # Business logic settings
    enforce_client_match: bool = False  # reject disputes whose client differs from the deposit's owner


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
