"""
Application settings using pydantic-settings

Loads environment variables from .env.local file
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Appointments backend
    appointments_api_url: str = Field(
        ...,
        alias="APPOINTMENTS_API_URL",
        description="Base URL of the appointments REST backend",
    )
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        alias="REQUEST_TIMEOUT_SECONDS",
        description="Per-request timeout in seconds (unset means wait indefinitely)",
    )

    # View behaviour
    success_message_ttl_ms: int = Field(
        default=2000,
        alias="SUCCESS_MESSAGE_TTL_MS",
        description="How long a success banner stays visible, in milliseconds",
    )

    # Environment
    env: str = Field(
        default="development",
        alias="ENV",
        description="Environment (development, staging, production)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    # UI Server Configuration
    ui_host: str = Field(default="0.0.0.0", alias="UI_HOST")
    ui_port: int = Field(default=8015, alias="UI_PORT")

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @computed_field
    @property
    def api_base_url(self) -> str:
        """Backend base URL with exactly one trailing slash"""
        return f"{self.appointments_api_url.rstrip('/')}/"

    @computed_field
    @property
    def success_message_ttl_seconds(self) -> float:
        return self.success_message_ttl_ms / 1000


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings

    Returns:
        Settings: Application settings instance
    """
    return Settings()
