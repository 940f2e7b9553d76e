"""Settings for the HTTP integration, read from ``JSONAPI_``-prefixed variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """JSON:API integration settings."""

    # Content type of error responses
    media_type: str = "application/vnd.api+json"
    # Put the exception message in 500 responses
    expose_internal_errors: bool = False

    model_config = SettingsConfigDict(env_prefix="JSONAPI_")


@lru_cache
def get_settings() -> JSONAPISettings:
    """Return cached settings instance."""
    return JSONAPISettings()
