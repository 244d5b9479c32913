"""Application settings and configuration."""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Practice Quiz API")

    # API
    API_PREFIX: str = Field(default="/v1")

    # Key-value store (REDIS_URL first, hosted KV_URL as fallback)
    REDIS_URL: str | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_URL", "KV_URL"),
    )
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0)
    REDIS_CONNECT_TIMEOUT: float = Field(default=2.0)

    # CORS - comma-separated origins
    CORS_ORIGINS: str = Field(default="http://localhost:3000")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Shared admin secret
    ADMIN_PASSWORD: str = Field(default=DEFAULT_ADMIN_PASSWORD)

    # Identifier lengths
    TEST_ID_LENGTH: int = Field(default=10, ge=4, le=64)
    RESULT_ID_LENGTH: int = Field(default=10, ge=4, le=64)

    @field_validator("REDIS_URL", "ADMIN_PASSWORD", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        """Trim stray whitespace copied into credentials."""
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGINS split into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @model_validator(mode="after")
    def check_production(self) -> "Settings":
        """Fail fast in production if critical vars are missing."""
        if self.ENV == "prod":
            if not self.REDIS_URL:
                raise ValueError("REDIS_URL must be set in production")
            if not self.ADMIN_PASSWORD or self.ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
                raise ValueError("ADMIN_PASSWORD must be changed in production")
        return self


# Global settings instance
settings = Settings()
