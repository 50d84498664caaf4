"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "SafeVault"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Session cookie
    SESSION_COOKIE_NAME: str = "safevault_session"
    SESSION_EXPIRE_MINUTES: int = 20
    SESSION_COOKIE_SECURE: bool = False

    # Database
    DATABASE_URL: str | None = None  # Optional: Use this if set (e.g., sqlite:///./data/safevault.db)
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Get database URI - supports both SQLite and PostgreSQL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.POSTGRES_SERVER and self.POSTGRES_USER and self.POSTGRES_PASSWORD and self.POSTGRES_DB:
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        return "sqlite:///./safevault.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.SQLALCHEMY_DATABASE_URI.startswith("sqlite")

    # First admin account (created on startup)
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_ADMIN_USERNAME: str = "admin"
    FIRST_ADMIN_EMAIL: str = "admin@example.com"
    FIRST_ADMIN_PASSWORD: str = "changethis"  # Max 72 bytes for bcrypt

    @field_validator("FIRST_ADMIN_PASSWORD", mode="after")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length for bcrypt (max 72 bytes)."""
        if v and len(v.encode('utf-8')) > 72:
            raise ValueError(
                f"FIRST_ADMIN_PASSWORD is too long ({len(v.encode('utf-8'))} bytes). "
                "Bcrypt has a maximum of 72 bytes. Please use a shorter password."
            )
        return v


settings = Settings()  # type: ignore
