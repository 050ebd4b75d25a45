"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Trip Planner"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./travel.db"
    DB_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "dev-secret-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Documents
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB, longest accepted fileUrl

    # Client
    API_URL: str = ""  # Empty = local-only mode, otherwise backend base address
    CLIENT_STORAGE_DIR: str = ".travel-app"
    MAX_DOCUMENT_FILE_URL_LENGTH: int = 500 * 1024  # Longer fileUrls are blanked before saving locally

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
