"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Categorization
    default_category_name: str = "Pantry"  # catch-all category, matched by name
    fallback_category_id: str = "default"  # used when no categories are configured at all

    # Identifiers minted for new lists and items
    item_id_prefix: str = "item"
    list_id_prefix: str = "list"

    # Aggregated quantities are rounded to this many decimal places
    quantity_precision: int = 4

    # Application
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def origins(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
