"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (local key-value table)
    database_url: str = "sqlite:///./enriquecer.db"

    # Persisted keys
    transactions_key: str = "transactions"
    categories_key: str = "categories"

    # Service
    service_name: str = "enriquecer"
    log_level: str = "INFO"

    # Reporting
    other_category_label: str = "Outros"

    # Backup
    export_filename_prefix: str = "enriquecer-dados"

    # App shell / offline cache
    cache_version: str = "v2"
    shell_assets: List[str] = ["/", "/index.html", "/manifest.webmanifest"]
    theme_color: str = "#ffca0f"


settings = Settings()
