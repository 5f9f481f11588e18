"""Environment-backed application settings with insecure development fallbacks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_SECRET = "your-super-secret-jwt-key-change-in-production"
DEFAULT_REFRESH_SECRET = "your-super-secret-refresh-key-change-in-production"
DEFAULT_PORT = 3001
DEFAULT_BCRYPT_ROUNDS = 12

USERS_FILENAME = "users.json"
LOGINS_FILENAME = "logins.json"


def _read_str(name: str, env: Mapping[str, str | None], default: str) -> str:
    value = env.get(name)
    if value is None or str(value).strip() == "":
        return default
    return str(value).strip()


def _read_int(name: str, env: Mapping[str, str | None], default: int) -> int:
    raw = _read_str(name, env, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    access_token_secret: str
    refresh_token_secret: str
    host: str
    port: int
    data_dir: Path
    cors_origin: str
    bcrypt_rounds: int
    app_env: str

    @property
    def users_file(self) -> Path:
        return self.data_dir / USERS_FILENAME

    @property
    def logins_file(self) -> Path:
        return self.data_dir / LOGINS_FILENAME


def load_settings(env: Mapping[str, str | None] | None = None) -> Settings:
    """Load environment variables into a Settings object.

    Secrets fall back to fixed, publicly known defaults so the demo boots
    without configuration. Deployments must set ``JWT_SECRET`` and
    ``JWT_REFRESH_SECRET``; a warning is logged for each default in use.
    """
    source_env = os.environ if env is None else env

    settings = Settings(
        access_token_secret=_read_str("JWT_SECRET", source_env, DEFAULT_ACCESS_SECRET),
        refresh_token_secret=_read_str("JWT_REFRESH_SECRET", source_env, DEFAULT_REFRESH_SECRET),
        host=_read_str("HOST", source_env, "0.0.0.0"),
        port=_read_int("PORT", source_env, DEFAULT_PORT),
        data_dir=Path(_read_str("DATA_DIR", source_env, "data")),
        cors_origin=_read_str("CORS_ORIGIN", source_env, "*"),
        bcrypt_rounds=_read_int("BCRYPT_ROUNDS", source_env, DEFAULT_BCRYPT_ROUNDS),
        app_env=_read_str("APP_ENV", source_env, "development"),
    )

    if settings.access_token_secret == settings.refresh_token_secret:
        raise RuntimeError("JWT_SECRET and JWT_REFRESH_SECRET must differ")
    if not 4 <= settings.bcrypt_rounds <= 31:
        raise RuntimeError("BCRYPT_ROUNDS must be between 4 and 31")
    if settings.access_token_secret == DEFAULT_ACCESS_SECRET:
        logger.warning("JWT_SECRET not set, using insecure default access-token secret")
    if settings.refresh_token_secret == DEFAULT_REFRESH_SECRET:
        logger.warning("JWT_REFRESH_SECRET not set, using insecure default refresh-token secret")

    logger.info("Loaded application settings for env=%s", settings.app_env)
    return settings
