"""Configuration management for the Feed API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FEED_", extra="ignore")

    # Bearer token verification
    jwt_secret: str
    jwt_algorithms: list[str] = Field(default_factory=lambda: ["HS256"])

    # Database
    database_url: str = "sqlite+aiosqlite:///./dev.db"
    db_auto_create: bool = True

    # Media storage
    storage_backend: str = Field(default="s3", pattern="^(s3|gcs)$")
    aws_region: str = Field(default="us-east-1")
    aws_profile: str = Field(default="")
    aws_media_bucket: str = Field(default="")
    gcs_bucket_name: str = Field(default="")
    gcs_credentials_file: str = Field(default="")  # Path to service account JSON file

    # Signed URLs
    signed_url_expiration_seconds: int = Field(default=300, ge=1)  # 5 minutes
    signing_concurrency: int = Field(default=16, ge=1)

    # HTTP
    api_prefix: str = "/api/v0/feed"
    frontend_origin: str = "http://localhost:8100"

    # Environment
    env: str = Field(default="dev", pattern="^(dev|prod)$")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
