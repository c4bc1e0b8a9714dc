"""
Application configuration.

Settings are read from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the backend."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "e-cenovnik backend"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8080
    RELOAD: bool = False
    CORS_ORIGINS: str = "*"

    # Storage
    UPLOAD_DIR: str = "uploads/marketFiles"
    SESSION_DIR: str = "sessions"

    # Admin login
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_PASSWORD_HASH: Optional[str] = None
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "session_id"

    # Spreadsheet rendering
    DATE_FORMAT: str = "%d.%m.%Y"

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def app_version(self) -> str:
        return self.APP_VERSION

    @property
    def debug(self) -> bool:
        return self.DEBUG

    @property
    def host(self) -> str:
        return self.HOST

    @property
    def port(self) -> int:
        return self.PORT

    @property
    def reload(self) -> bool:
        return self.RELOAD

    @property
    def log_format(self) -> str:
        return "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_allow_credentials(self) -> bool:
        # Browsers reject credentialed requests against a wildcard origin
        return "*" not in self.cors_origins


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


settings = get_settings()
