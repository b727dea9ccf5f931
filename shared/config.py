"""
Centralized configuration for the Splitwise backend.

All settings are loaded from environment variables with sensible defaults.
Settings are read once per process; there is no hot reload.
"""

from functools import lru_cache
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

# Placeholder shipped in .env.example; never acceptable in production.
DEFAULT_JWT_SECRET = "your-super-secret-jwt-key"

MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Splitwise API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    jwt_secret: SecretStr = SecretStr("")
    jwt_issuer: str = "splitwise-api"
    jwt_audience: str = "splitwise-client"
    jwt_algorithm: str = "HS256"
    jwt_expires_in_seconds: int = 12 * 60 * 60

    # Password hashing (bcrypt accepts cost factors 4-31)
    bcrypt_rounds: int = Field(12, ge=4, le=31)

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""
    users_table: str = "users"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def validate_auth(self) -> None:
        """
        Check the signing secret before the service accepts traffic.

        Raises:
            ConfigurationError: If the secret is missing, or is the
                development placeholder / too short in production.
        """
        secret = self.jwt_secret.get_secret_value()
        if not secret:
            raise ConfigurationError(
                "JWT secret is not configured. Set the JWT_SECRET environment variable.",
                details={"setting": "JWT_SECRET"},
            )
        if self.is_production and (
            secret == DEFAULT_JWT_SECRET or len(secret) < MIN_PRODUCTION_SECRET_LENGTH
        ):
            raise ConfigurationError(
                "JWT secret is too weak for production.",
                details={"setting": "JWT_SECRET"},
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
