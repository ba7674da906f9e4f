from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and `.env`.

    STORE_BACKEND selects where products live:
    - "json": a single JSON array in PRODUCTS_FILE
    - "sql": the `products` table behind DATABASE_URL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Product Catalog API"
    VERSION: str = "1.0.0"

    # Storage
    STORE_BACKEND: Literal["json", "sql"] = "json"
    PRODUCTS_FILE: str = "products.json"
    DATABASE_URL: str = "sqlite:///./products.db"
    EXPIRATION_FORMAT: str = "%d/%m/%Y"

    # Shared secret expected in the TOKEN header. Requests are rejected
    # while it is unset; REQUIRE_TOKEN=false turns the check off.
    TOKEN: str = ""
    REQUIRE_TOKEN: bool = True

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
