"""
Application configuration using Pydantic settings.
Loads from environment variables or .env file.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = "Voice Relay"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 3000

    # GCP Settings (user store)
    gcp_project_id: str = ""
    google_application_credentials: str = ""
    users_collection: str = "users"

    # Azure Speech settings (synthesis provider)
    azure_speech_key: str = ""
    azure_speech_region: str = ""
    default_voice: str = "en-US-JennyNeural"
    default_text: str = "Hello"

    # Auth settings
    secret_key: str = "change-this-in-production-use-a-long-random-string"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 10

    # CORS settings - stored as a plain string, parsed by get_cors_origins()
    cors_origins: str = "http://localhost:4200,https://angular-polly-app.onrender.com"

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
