# recipe_api/adapters/configuration/config.py

"""
Application Settings Configuration
"""

from pathlib import Path
from logging import getLevelName
from typing import Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, PostgresDsn, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env na raiz do projeto
env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(env_path)

AUTH_PREFIX = "/api/v1/auth"
REFRESH_PATH = f"{AUTH_PREFIX}/refresh"


class Settings(BaseSettings):
    """
    Application settings: environment, logging, tokens, cookies, CSRF,
    rate limiting and database.
    """
    model_config = SettingsConfigDict(
        env_file=str(env_path),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # General Project Info
    PROJECT_NAME: str = Field(default="Recipe API", description="Name of the project")
    VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Environment: development, production, testing")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    LOG_JSON: bool = Field(default=False, description="Emit one JSON object per log line")

    # Auth Settings
    JWT_SECRET: Optional[SecretStr] = Field(default=None, description="Signing secret, at least 32 characters")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=15, description="Access token lifetime (minutes)")
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, description="Refresh token lifetime (days)")
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31, description="bcrypt cost factor for new hashes")

    # Cookies
    COOKIE_SECURE: Optional[bool] = Field(
        default=None, description="Force the Secure flag on or off; unset derives it from the request scheme"
    )
    COOKIE_SAMESITE: str = Field(default="lax", description="SameSite policy for cookies: lax, strict, or none")
    COOKIE_DOMAIN: Optional[str] = Field(default=None, description="Domain for cookies (e.g. example.com)")

    # Proteção CSRF e tamanho de corpo
    CSRF_HEADER_NAME: str = Field(default="X-CSRF-Token", description="CSRF header name")
    CSRF_EXEMPT_PATHS: str = Field(
        default=",".join([
            f"{AUTH_PREFIX}/login",
            f"{AUTH_PREFIX}/signup",
            REFRESH_PATH,
            f"{AUTH_PREFIX}/guest-session",
        ]),
        description="Comma-separated paths exempt from CSRF validation",
    )
    CSRF_EXEMPT_PATTERNS: str = Field(
        default=r"^/api/v1/recipes/[^/]+/view$",
        description="Comma-separated regular expressions for CSRF-exempt paths",
    )
    MAX_REQUEST_BODY_BYTES: int = Field(default=1048576, gt=0, description="Maximum body size for writes")

    # Rate limiting
    RATE_LIMIT_WINDOW_MS: int = Field(default=900000, gt=0, description="Fixed window length (ms)")
    RATE_LIMIT_MAX_AUTH: int = Field(default=20, gt=0, description="Auth-class requests per window")
    RATE_LIMIT_MAX_WRITE: int = Field(default=50, gt=0, description="Write-class requests per window")
    RATE_LIMIT_MAX_READ: int = Field(default=100, gt=0, description="Read-class requests per window")
    RATE_LIMIT_STORAGE_URI: str = Field(default="memory://", description="limits storage URI (memory://, redis://host:port)")

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated allowed CORS origins",
    )

    # Database
    DATABASE_URL: Optional[str] = Field(default=None, description="Database connection URL")
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "recipes"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DB_ECHO: bool = Field(default=False, description="Log every SQL statement")
    DB_AUTO_CREATE: bool = Field(default=False, description="Create tables on startup")

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that the log level is a valid level name.
        """
        lvl = str(v).upper()
        if getLevelName(lvl) == "Level %s" % lvl:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return lvl

    @field_validator("COOKIE_SAMESITE", mode="before")
    def validate_cookie_samesite(cls, v: str) -> str:
        """Valida a política SameSite do cookie."""
        if str(v).lower() not in ["lax", "strict", "none"]:
            raise ValueError(f"COOKIE_SAMESITE must be 'lax', 'strict' or 'none', got: {v}")
        return str(v).lower()

    @field_validator("COOKIE_SECURE", mode="before")
    def parse_optional_boolean(cls, v: Union[str, bool, None]) -> Optional[bool]:
        """Empty string means 'not set'."""
        if isinstance(v, str):
            if not v.strip():
                return None
            return v.lower() in ("true", "1", "yes", "y", "on")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return _split_csv(self.ALLOWED_ORIGINS)

    @property
    def csrf_exempt_paths(self) -> List[str]:
        return _split_csv(self.CSRF_EXEMPT_PATHS)

    @property
    def csrf_exempt_patterns(self) -> List[str]:
        return _split_csv(self.CSRF_EXEMPT_PATTERNS)

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.RATE_LIMIT_WINDOW_MS / 1000

    @property
    def rate_limit_maxima(self) -> Dict[str, int]:
        return {
            "auth": self.RATE_LIMIT_MAX_AUTH,
            "write": self.RATE_LIMIT_MAX_WRITE,
            "read": self.RATE_LIMIT_MAX_READ,
        }

    @property
    def database_url(self) -> str:
        """DATABASE_URL when given, otherwise assembled from the POSTGRES_* values."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        ))


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
