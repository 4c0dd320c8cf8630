"""
Configuration loader for the remove.bg relay service.

Environment variables are centralized here to keep the rest of the code
focused on relaying and to make operational tuning clear. A `.env` file in
the working directory is read as well.
"""

from functools import lru_cache
from typing import Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000
DEFAULT_API_URL = "https://api.remove.bg/v1.0/removebg"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Upstream
    remove_bg_api_key: SecretStr
    remove_bg_api_url: str = DEFAULT_API_URL
    remove_bg_size: str = "auto"
    # None keeps the outbound call without a timeout.
    request_timeout_seconds: Optional[float] = None

    # Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @field_validator("remove_bg_api_key")
    @classmethod
    def validate_api_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("REMOVE_BG_API_KEY must not be empty")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings to avoid reparsing env on every call."""
    return Settings()
