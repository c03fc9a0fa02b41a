"""
Runtime configuration.

Values come from environment variables (a local .env file is loaded
if present). Settings are built once at startup and handed to the
services that need them.
"""
import os
import logging
from typing import List, Optional

from dotenv import load_dotenv

from storefront.errors import ConfigurationError

load_dotenv()

logger = logging.getLogger("storefront.config")

# Only used when STOREFRONT_ENV=development. Never deploy with this.
DEV_SECRET_KEY = "dev-secret-key"
DEVELOPMENT_ENVS = ("development", "dev", "test")


class Settings:
    """Application settings."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        jwt_secret_key: Optional[str] = None,
        jwt_algorithm: Optional[str] = None,
        access_token_expire_seconds: Optional[int] = None,
        environment: Optional[str] = None,
        log_level: Optional[str] = None,
        cors_origins: Optional[List[str]] = None,
    ):
        self.environment = (environment or os.getenv("STOREFRONT_ENV", "development")).lower()
        self.database_url = database_url or os.getenv(
            "DATABASE_URL", "sqlite+aiosqlite:///./data/storefront.db"
        )
        self.jwt_secret_key = jwt_secret_key or os.getenv("JWT_SECRET_KEY")
        self.jwt_algorithm = jwt_algorithm or os.getenv("JWT_ALGORITHM", "HS256")
        if access_token_expire_seconds is None:
            access_token_expire_seconds = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", 3600))
        self.access_token_expire_seconds = access_token_expire_seconds
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
        if cors_origins is None:
            cors_origins = [
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ]
        self.cors_origins = cors_origins

        self._check_secret()

    @property
    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVS

    def _check_secret(self):
        if self.jwt_secret_key:
            return
        if not self.is_development:
            raise ConfigurationError(
                "JWT_SECRET_KEY must be set when STOREFRONT_ENV is "
                f"'{self.environment}'"
            )
        logger.warning(
            "JWT_SECRET_KEY is not set; using the built-in development secret. "
            "Tokens signed with it are forgeable by anyone."
        )
        self.jwt_secret_key = DEV_SECRET_KEY


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
