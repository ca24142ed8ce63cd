"""Application configuration.

Environment variables override all defaults. A ``backend/.env`` file is loaded
for local development. SECRET_KEY must be set when ENVIRONMENT=production.
"""

import os
import warnings
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Online Pharmacy API")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pharmacy.db")

    # Routes are mounted under this prefix ("" or e.g. "/api")
    API_PREFIX: str = os.getenv("API_PREFIX", "").rstrip("/")

    # JWT
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    if not SECRET_KEY:
        if ENVIRONMENT == "production":
            raise ValueError(
                "SECRET_KEY must be set in production. "
                "Generate with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        warnings.warn(
            "SECRET_KEY not set in environment. Using development default. "
            "Set SECRET_KEY in .env before deploying.",
            RuntimeWarning,
        )
        SECRET_KEY = "development-only-weak-default-change-in-production"

    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    TOKEN_COOKIE_NAME: str = "pharmacy_token"

    # CORS / hosts
    CORS_ORIGINS: List[str] = _split_csv(
        os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
    )
    ALLOWED_HOSTS: List[str] = _split_csv(os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1"))

    # Cookies
    SECURE_COOKIES: bool = ENVIRONMENT == "production"
    SAME_SITE_COOKIE: str = "strict"

    # Rate limiting (applied to /auth routes)
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "20"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

    # Password policy
    MIN_PASSWORD_LENGTH: int = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))

    # Catalogue
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    MAX_PAGE_SIZE: int = 100

    # Order workflow
    ENFORCE_STATUS_TRANSITIONS: bool = _flag("ENFORCE_STATUS_TRANSITIONS", "true")
    RESERVE_STOCK_ON_ORDER: bool = _flag("RESERVE_STOCK_ON_ORDER", "false")

    # Uploaded files
    MEDIA_ROOT: str = os.getenv("MEDIA_ROOT", str(_BACKEND_DIR / "media"))
    MEDIA_URL: str = os.getenv("MEDIA_URL", "/media").rstrip("/")
    ALLOWED_IMAGE_EXTENSIONS: tuple = (".jpg", ".jpeg", ".png", ".gif")


settings = Settings()
