import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "StaffDesk API"
    database_url: str = Field(
        default="sqlite:///./staffdesk.db",
        description="Database connection string for the SQL storage backend",
    )
    storage_backend: Literal["sql", "json"] = Field(
        default="sql", description="Which storage adapter backs the repositories"
    )
    json_store_path: Path = Field(
        default=Path("data/staffdesk.json"), description="Document used by the JSON storage backend"
    )
    jwt_secret: str = Field(default="change-me-in-production", description="HMAC key for session tokens")
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = Field(default=24, ge=1)
    seed_defaults: bool = True
    cors_origins: Annotated[list[str], NoDecode] = []
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")

    api_url: str = Field(default="http://localhost:8000", description="Base URL used by the client and CLI")
    session_path: Path = Field(
        default=Path.home() / ".staffdesk" / "session.json",
        description="Where the client keeps its session token",
    )

    model_config = SettingsConfigDict(env_prefix="STAFFDESK_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("STAFFDESK_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


settings = get_settings()
