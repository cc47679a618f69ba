"""Application configuration using pydantic-settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    gemini_api_key: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    # Model Settings
    ai_model_id: str = "gemini-2.0-flash-exp"
    ai_model_provider: str = "google"
    ai_model_temperature: float = 0.3
    # No default max tokens - let the model use its natural maximum
    ai_model_max_tokens: Optional[int] = None

    # Telemetry
    telemetry_enabled: bool = False
    telemetry_project_name: str = "momentum"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
