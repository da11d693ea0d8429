"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    api_version: str = "0.1.0"
    debug: bool = False
    cors_allow_origins: list[str] = ["*"]

    # Database
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/catalog"
    create_tables_on_startup: bool = False

    # Catalog
    default_page_size: int = 20
    max_page_size: int = 100
    products_per_category: int = 8
    uncategorized_label: str = "Uncategorized"
    # "affected" reassigns only products of the deleted category, "all" every product
    category_delete_scope: Literal["affected", "all"] = "affected"

    # ImageKit
    imagekit_private_key: str = ""
    imagekit_upload_url: str = "https://upload.imagekit.io/api/v1/files/upload"
    imagekit_api_url: str = "https://api.imagekit.io/v1"
    asset_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
