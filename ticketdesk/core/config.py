# ticketdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator


class Settings(BaseSettings):
    APP_NAME: str = "Ticket Desk"
    APP_DESC: str = "Support ticket tracker backed by MongoDB"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # MongoDB
    MONGODB_URI: str | None = None  # required in production
    MONGODB_DB: str = "helpdesk"
    MONGODB_MAX_POOL_SIZE: int = Field(default=10, ge=1)
    MONGODB_MIN_POOL_SIZE: int = Field(default=1, ge=0)
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 10_000
    MONGODB_CONNECT_TIMEOUT_MS: int = 10_000
    MONGODB_SOCKET_TIMEOUT_MS: int = 45_000

    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str = "*"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def require_uri_in_production(self) -> "Settings":
        if self.is_production and not self.MONGODB_URI:
            raise ValueError("MONGODB_URI is missing in the production environment")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def expose_error_details(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
