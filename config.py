from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


BACKEND_DIR = Path(__file__).resolve().parent
REPO_ROOT = BACKEND_DIR.parent

logger = logging.getLogger(__name__)


def load_env() -> Path | None:
    """Load .env (backend folder first, then repo root). Returns the file used."""
    for candidate in (BACKEND_DIR / ".env", REPO_ROOT / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=True)
            logger.info("[Config] Loaded .env from %s", candidate)
            return candidate
    logger.warning("[Config] No .env file found, using system env vars")
    return None


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str | None
    mongodb_db: str

    host: str
    port: int
    debug: bool
    log_level: str

    # Comma separated list, "*" allows any origin
    cors_origins: tuple[str, ...]

    # Access and refresh tokens are signed with different secrets
    jwt_secret: str
    jwt_refresh_secret: str
    access_token_ttl_minutes: int
    refresh_token_ttl_days: int

    bcrypt_rounds: int


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_list(name: str, default: str) -> tuple[str, ...]:
    value = os.getenv(name, default)
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _get_secret(name: str, default: str) -> str:
    value = os.getenv(name)
    if not value:
        logger.warning("[Config] %s not set, using the built-in development secret", name)
        return default
    return value


def get_settings() -> Settings:
    return Settings(
        mongodb_uri=os.getenv("MONGODB_URI"),
        mongodb_db=os.getenv("MONGODB_DB", "marketplace"),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_get_int("PORT", 5000),
        debug=_get_bool("FLASK_DEBUG", False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_get_list("CORS_ORIGINS", "*"),
        jwt_secret=_get_secret("JWT_SECRET", "marketplace-access-secret-change-in-production"),
        jwt_refresh_secret=_get_secret("JWT_REFRESH_SECRET", "marketplace-refresh-secret-change-in-production"),
        access_token_ttl_minutes=_get_int("ACCESS_TOKEN_TTL_MINUTES", 60),
        refresh_token_ttl_days=_get_int("REFRESH_TOKEN_TTL_DAYS", 7),
        bcrypt_rounds=_get_int("BCRYPT_ROUNDS", 12),
    )
