"""Application configuration."""
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Environment variables take precedence over .env file.
    This makes it compatible with Docker (uses env vars) and
    local development (uses .env file).
    """

    APP_NAME: str = "Inventory Hub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./inventory_hub.db"

    CORS_ORIGINS: List[str] = ["*"]

    # Identity provider (ID token verification)
    FIREBASE_PROJECT_ID: str = ""
    ID_TOKEN_CERTS_URL: str = (
        "https://www.googleapis.com/robot/v1/metadata/x509/"
        "securetoken@system.gserviceaccount.com"
    )

    # Salesforce
    SF_LOGIN_URL: str = "https://login.salesforce.com"
    SF_CLIENT_ID: str = ""
    SF_CLIENT_SECRET: str = ""
    SF_API_VERSION: str = "v59.0"
    CLIENT_URL: str = "http://localhost:3000"

    # Listing limits
    ITEMS_DEFAULT_LIMIT: int = 200
    SEARCH_DEFAULT_LIMIT: int = 20
    SEARCH_MAX_LIMIT: int = 50

    model_config = SettingsConfigDict(
        # Only load .env file if it exists (for local dev)
        # Docker will use environment variables directly
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        # Environment variables take precedence over .env file
        extra="ignore",
    )

    @property
    def salesforce_redirect_uri(self) -> str:
        return f"{self.CLIENT_URL.rstrip('/')}/salesforce/callback"


settings = Settings()
