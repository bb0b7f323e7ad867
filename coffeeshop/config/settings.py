from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Coffeeshop Manager API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    api_version: str = "v1"
    log_level: str = "INFO"

    # ── Database ─────────────────────────────────────────────────
    mongodb_uri: Optional[str] = None
    database_name: str = "coffeeshop_db"

    # ── JWT / Security ───────────────────────────────────────────
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 1 day
    min_password_length: int = 8

    # ── Pagination ───────────────────────────────────────────────
    default_page_limit: int = 10
    max_page_limit: int = 100

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
