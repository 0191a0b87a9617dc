# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for various aspects of the application:
# Database connection details
# Session cookie lifetime
# Image upload limits and storage (local directory or Cloudflare R2)
# Category vocabulary seeded at startup


import os
import json
from pathlib import Path
from typing import Annotated, List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[2]

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Forum"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./forum.db")

    # Sessions
    SESSION_COOKIE_NAME: str = "session_token"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24  # 24 hours

    # Presentation
    TEMPLATES_DIRECTORY: str = os.getenv("TEMPLATES_DIRECTORY", str(BASE_DIR / "templates"))
    UI_DIRECTORY: str = os.getenv("UI_DIRECTORY", str(BASE_DIR / "ui"))

    # File uploads
    UPLOAD_DIRECTORY: str = os.getenv("UPLOAD_DIRECTORY", "uploads")
    MAX_IMAGE_SIZE: int = 20 * 1024 * 1024  # 20 MB

    # Cloudflare R2 Storage, optional; local uploads are used when unset
    R2_ENDPOINT: str = os.getenv("R2_ENDPOINT", "")
    R2_ACCESS_KEY_ID: str = os.getenv("R2_ACCESS_KEY_ID", "")
    R2_SECRET_ACCESS_KEY: str = os.getenv("R2_SECRET_ACCESS_KEY", "")
    R2_BUCKET_NAME: str = os.getenv("R2_BUCKET_NAME", "forum-media")
    R2_PUBLIC_URL: str = os.getenv("R2_PUBLIC_URL", "")

    # Category vocabulary
    DEFAULT_CATEGORIES: Annotated[List[str], NoDecode] = [
        "Autobiography",
        "Comedy",
        "Science Fiction",
        "Fantasy",
        "Mystery",
        "Other",
    ]

    # Development settings - set these differently in production
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ["true", "1", "t"]
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    @field_validator("DEFAULT_CATEGORIES", mode="before")
    @classmethod
    def assemble_categories(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [v]
        return v

# Create settings instance
settings = Settings()
