"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with ACCOUNTD_ prefix.
No YAML files, no file-based config — just env vars (12-factor app style).

The Settings object is built once at startup and handed to create_app(),
which wires it into the hasher, token issuer and database engine. It is
frozen: nothing mutates configuration after startup.
"""

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """All app configuration. Set via ACCOUNTD_* env vars."""

    # Database (required)
    database_url: str

    # Auth (secret is required)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_in: PositiveInt = 3600  # seconds
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # CORS (disabled when empty)
    cors_origins: list[str] = []

    model_config = SettingsConfigDict(env_prefix="ACCOUNTD_", frozen=True)

    @field_validator("database_url", "jwt_secret")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"ACCOUNTD_{info.field_name.upper()} must not be empty")
        return value

    @field_validator("jwt_algorithm")
    @classmethod
    def _hmac_only(cls, value: str) -> str:
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError("ACCOUNTD_JWT_ALGORITHM must be one of HS256, HS384, HS512")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"ACCOUNTD_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level
