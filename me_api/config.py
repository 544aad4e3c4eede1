"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - Supports a full URL (DATABASE_URL) or discrete DB_* parts
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "me_api_playground"

    # Connection pool
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = 30.0

    # Application
    app_name: str = "Me API"
    environment: str = "development"
    port: int = 3001
    debug: bool = False

    # CORS
    cors_origin: str = "*"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max_requests: int = 100

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_dir: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def sqlalchemy_url(self) -> str:
        """Build the async SQLAlchemy URL.

        Prefers DATABASE_URL if set, otherwise constructs one from the DB_*
        parts. Plain postgres:// URLs are rewritten for the asyncpg driver.
        """
        if self.database_url:
            url = self.database_url
            if url.startswith("postgres://"):
                return url.replace("postgres://", "postgresql+asyncpg://", 1)
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        credentials = self.db_user
        if self.db_password:
            credentials = f"{self.db_user}:{self.db_password}"
        return (
            f"postgresql+asyncpg://{credentials}@{self.db_host}:{self.db_port}"
            f"/{self.db_name}"
        )

    @property
    def rate_limit(self) -> str:
        """Rate limit in `limits` notation, e.g. '100/900 seconds'."""
        window_seconds = max(1, self.rate_limit_window_ms // 1000)
        return f"{self.rate_limit_max_requests}/{window_seconds} seconds"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


# Global settings instance
settings = Settings()
