"""Application configuration."""

import os
from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from forq.domain.errors import ConfigurationError

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fatsecret_consumer_key: str
    fatsecret_consumer_secret: str
    fatsecret_base_url: str = "https://platform.fatsecret.com/rest/server.api"
    fatsecret_timeout_seconds: float = 15.0
    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


@dataclass(frozen=True)
class FatSecretCredentials:
    """Consumer credentials for the two-legged FatSecret OAuth 1.0 flow."""

    consumer_key: str
    consumer_secret: str

    def __post_init__(self) -> None:
        if not self.consumer_key or not self.consumer_key.strip():
            raise ConfigurationError("FATSECRET_CONSUMER_KEY is not set")
        if not self.consumer_secret or not self.consumer_secret.strip():
            raise ConfigurationError("FATSECRET_CONSUMER_SECRET is not set")

    @classmethod
    def from_settings(cls, settings: Settings) -> "FatSecretCredentials":
        """Build credentials from application settings."""
        return cls(
            consumer_key=settings.fatsecret_consumer_key,
            consumer_secret=settings.fatsecret_consumer_secret,
        )
