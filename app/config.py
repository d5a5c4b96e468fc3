"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Deal Analysis Engine"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Projection defaults (percent)
    default_appreciation_rate: float = 3.0
    default_income_growth_rate: float = 3.0
    default_expense_growth_rate: float = 2.0

    # Hold-period IRR defaults
    default_selling_costs_percent: float = 6.0
    default_hold_years: int = 5

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
