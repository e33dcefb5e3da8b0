"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage backend
    store_backend: Literal["sql", "rest", "memory"] = "sql"
    database_url: str = "sqlite:///./moneydesk.db"

    # Managed REST store (PostgREST-compatible)
    rest_store_url: str = "http://localhost:54321/rest/v1"
    rest_store_api_key: str = ""

    # Service
    service_name: str = "moneydesk"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Display
    currency_code: str = "INR"
    currency_locale: str = "en_IN"


def get_settings() -> Settings:
    """Load settings from the environment; called once by the entrypoint"""
    return Settings()
