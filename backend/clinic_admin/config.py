from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(...)

    # JWT
    jwt_secret: str = Field(...)
    jwt_algorithm: str = Field(default="HS256")
    token_expire_seconds: int = Field(default=86400)

    # Password hashing
    bcrypt_rounds: int = Field(default=12)

    # HTTP
    cors_origins: list[str] = Field(default=["*"])
    log_level: str = Field(default="INFO")

    # First admin, seeded on startup when set
    bootstrap_admin_email: Optional[str] = Field(default=None)
    bootstrap_admin_password: Optional[str] = Field(default=None)
    bootstrap_admin_first_name: str = Field(default="System")
    bootstrap_admin_last_name: str = Field(default="Admin")

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
