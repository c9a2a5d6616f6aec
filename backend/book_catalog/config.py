"""Application configuration and environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./book_catalog.db"

    # Document store
    store_backend: str = "sql"  # Options: sql, memory
    collection_name: str = "books"
    store_timeout_seconds: float = 10.0

    # Catalog behaviour
    seed_sample_data: bool = True
    enable_delete: bool = False

    # Application
    app_name: str = "Book Catalog"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3030

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @property
    def async_database_url(self) -> str:
        """Database URL with an async driver for PostgreSQL."""
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
