"""
Configuration management for the Task Lists backend
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    db_uri: str = "mongodb://localhost:27017"
    db_name: str = "tasklists"

    # Auth
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_expiry_days: int = 7

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["*"]

    # Environment
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()


def require_jwt_secret(settings: Settings) -> str:
    """Return the token signing secret, refusing to run without one."""
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET must be set to sign session tokens")
    return settings.jwt_secret
