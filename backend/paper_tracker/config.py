"""Application configuration objects."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class BaseConfig:
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
    TESTING: bool = False

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///paper_tracker.db")
    SQL_ECHO: bool = _env_bool("SQL_ECHO")
    POOL_SIZE: int = int(os.getenv("POOL_SIZE", 10))
    MAX_OVERFLOW: int = int(os.getenv("MAX_OVERFLOW", 20))

    # Repository backend
    PAPER_REPO_BACKEND: str = os.getenv("PAPER_REPO_BACKEND", "sqlalchemy")

    # Supabase
    SUPABASE_URL: str | None = os.getenv("SUPABASE_URL") or None
    SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY") or None
    SUPABASE_SERVICE_ROLE_KEY: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or None
    SUPABASE_TABLE: str = os.getenv("SUPABASE_TABLE", "papers")

    # Mail
    MAIL_BACKEND: str = os.getenv("MAIL_BACKEND", "console")
    MAIL_FROM: str = os.getenv("MAIL_FROM", "no-reply@localhost")
    SMTP_HOST: str = os.getenv("SMTP_HOST", "localhost")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", 587))
    SMTP_USER: str | None = os.getenv("SMTP_USER") or None
    SMTP_PASSWORD: str | None = os.getenv("SMTP_PASSWORD") or None
    SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "true")
    SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", 30))
    # console backend only: keep the last MAIL_RECORD_HISTORY messages in memory
    MAIL_RECORD: bool = _env_bool("MAIL_RECORD")
    MAIL_RECORD_HISTORY: int = int(os.getenv("MAIL_RECORD_HISTORY", 100))

    # Lifecycle
    STRICT_STAGE_SEQUENCE: bool = _env_bool("STRICT_STAGE_SEQUENCE")

    # HTTP
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass
class TestConfig(BaseConfig):
    TESTING: bool = True
    DATABASE_URL: str = "sqlite:///:memory:"
    PAPER_REPO_BACKEND: str = "sqlalchemy"
    MAIL_BACKEND: str = "console"
    MAIL_RECORD: bool = True
    STRICT_STAGE_SEQUENCE: bool = False
    LOG_LEVEL: str = "DEBUG"
