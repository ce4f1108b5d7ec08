# File: common/config/settings.py

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Calculate base directory for consistent file paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent.parent
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = Field("development", description="'production' or 'development'")
    PORT: int = Field(5000, description="Port the API listens on")

    BASE_DIR: Path = Field(default=BASE_DIR, description="Base directory of the project")

    # Admin tokens
    ADMIN_JWT_SECRET: str = Field(..., description="Secret used to sign admin tokens")
    ADMIN_JWT_EXPIRE_DAYS: int = Field(7, description="Admin token expiry in days")
    JWT_ALGORITHM: str = Field("HS256", description="JWT signing algorithm")

    # Bootstrap admin, created on startup when both are set
    ADMIN_USERNAME: str = Field("", description="Bootstrap admin username")
    ADMIN_PASSWORD: str = Field("", description="Bootstrap admin password")

    # MongoDB
    MONGO_URI: str = Field("mongodb://localhost:27017", description="MongoDB connection URI")
    MONGO_DB: str = Field("sentic", description="MongoDB database name")
    MONGO_TIMEOUT: int = Field(5000, description="MongoDB connection timeout in milliseconds")

    # ML classifier
    ML_API_URL: str = Field("", description="Base URL of the issue classifier; empty disables it")
    ML_API_KEY: str = Field("", description="Value sent as x-api-key to the classifier")
    ML_API_TIMEOUT: int = Field(7000, description="Classifier request timeout in milliseconds")

    # Uploads
    MAX_UPLOAD_BYTES: int = Field(5 * 1024 * 1024, description="Maximum accepted image size")

    # Object storage (reserved, images are stored inline)
    AWS_REGION: str = Field("us-east-1", description="S3 region")
    S3_BUCKET: str = Field("", description="S3 bucket for report images")
    AWS_ACCESS_KEY_ID: str = Field("", description="S3 access key")
    AWS_SECRET_ACCESS_KEY: str = Field("", description="S3 secret key")

    # HTTP
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # Observability
    SENTRY_DSN: str = Field("", description="Sentry DSN; empty disables Sentry")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.0, description="Sentry traces sample rate")
    LOG_TO_FILE: bool = Field(False, description="Also write logs to the logs/ directory")

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
