"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_username: str = "Admin"
    admin_default_password: str = "admin123"
    bcrypt_rounds: int = 10
    session_cookie_name: str = "portal_session"
    session_cookie_secure: bool = False
    session_ttl_days: int = 7
    session_store: str = "supabase"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
