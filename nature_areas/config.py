from functools import lru_cache
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

# Explicitly load .env file to ensure environment variables are available
load_dotenv()


class Settings(BaseSettings):
    APP_ENV: Literal["production", "development"] = Field(
        default="production",
        description="Application environment: production or development"
    )

    # Upstream REST APIs (Naturvårdsverket geodata)
    NVV_API_BASE: str = Field(
        default="https://geodata.naturvardsverket.se/naturvardsregistret/rest/v3",
        description="Base URL of the national protected areas registry (NVR)"
    )
    N2000_API_BASE: str = Field(
        default="https://geodata.naturvardsverket.se/n2000/rest/v3",
        description="Base URL of the Natura 2000 API"
    )
    RAMSAR_API_BASE: str = Field(
        default="https://geodata.naturvardsverket.se/internationellakonventioner/rest/v3",
        description="Base URL of the Ramsar wetlands API"
    )
    UPSTREAM_TIMEOUT_S: float = Field(default=30.0, description="Timeout for each upstream request in seconds")

    # Query defaults
    DEFAULT_DECISION_STATUS: str = Field(default="Gällande", description="Default NVR decision status")
    DEFAULT_LIST_LIMIT: int = Field(default=100, ge=1, le=500, description="Default number of areas returned by list queries")

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    LOG_FORMAT: str = Field(default="", description="Set to 'json' to force structured logs")

    # Server settings
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8002, description="Port for the Uvicorn server")
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed CORS origins")
    RATE_LIMIT: str = Field(default="60/minute", description="Per-client request limit")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        extra="ignore"
    )

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


def validate_environment_configuration(settings: Settings) -> None:
    """Fail fast on settings that would only break at the first upstream call"""
    for field_name in ("NVV_API_BASE", "N2000_API_BASE", "RAMSAR_API_BASE"):
        value = getattr(settings, field_name)
        if not value.startswith(("http://", "https://")):
            raise ConfigurationError(field_name, f"expected an http(s) URL, got {value!r}")

    if settings.UPSTREAM_TIMEOUT_S <= 0:
        raise ConfigurationError("UPSTREAM_TIMEOUT_S", "timeout must be positive")


@lru_cache()
def get_settings() -> Settings:
    """Dependency for getting settings with validation."""
    settings = Settings()
    validate_environment_configuration(settings)
    return settings
