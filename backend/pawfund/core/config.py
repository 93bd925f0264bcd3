"""Module: config."""

from pydantic_settings import BaseSettings

# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Primary SQLAlchemy connection string for the backend database.
    database_url: str
    # Optional engine-wide isolation level, e.g. "SERIALIZABLE" or "REPEATABLE READ".
    db_isolation_level: str | None = None
    # Echo SQL statements to the log (debugging only).
    db_echo: bool = False

    # Root logger level and optional file sink.
    log_level: str = "INFO"
    log_file: str | None = None

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

# Global settings instance imported by app modules at runtime.
settings = Settings()
