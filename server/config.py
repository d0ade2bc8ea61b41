# server/config.py

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote_plus
from dotenv import load_dotenv


SERVER_DIR = Path(__file__).resolve().parent
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/app.db"


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


@dataclass(frozen=True)
class Settings:
    """Typed view of the environment."""

    jwt_secret: str
    app_env: str = "development"
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    db_echo: bool = False


def _int(value: str | None, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_env_files(app_env: str):
    """
    Loads `.env.production` or `.env.development` from the server directory,
    then a plain `.env` if one is found. Variables already set in the
    process environment are never overridden.
    """
    env_name = ".env.production" if app_env == "production" else ".env.development"
    load_dotenv(SERVER_DIR / env_name)
    load_dotenv()


def build_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    if not host:
        return DEFAULT_DATABASE_URL

    user = quote_plus(os.getenv("DB_USER", ""))
    password = quote_plus(os.getenv("DB_PASSWORD", ""))
    port = os.getenv("DB_PORT", "3306")
    name = os.getenv("DB_NAME", "")
    return f"mysql+aiomysql://{user}:{password}@{host}:{port}/{name}"


def load_settings() -> Settings:
    app_env = (os.getenv("APP_ENV") or "development").lower()
    load_env_files(app_env)

    secret = os.getenv("JWT_SECRET", "").strip()
    if not secret:
        raise ConfigError("JWT_SECRET environment variable is not set")

    return Settings(
        jwt_secret=secret,
        app_env=app_env,
        database_url=build_database_url(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), 5000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        db_echo=_bool(os.getenv("DB_ECHO")),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
