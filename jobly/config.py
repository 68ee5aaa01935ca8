"""
Configuration management for Jobly.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Auth
    secret_key: str = "secret-dev"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    bcrypt_work_factor: int = 12

    # API
    cors_origins: str = "http://localhost:3000"
    rate_limit_enabled: bool = True
    auth_rate_limit: str = "10/minute"

    # Observability
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
