"""
Environment-driven settings.

Blank or unparsable values fall back to the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    return environ.get(name, "").strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "root"
    db_password: str = ""
    db_database: str = "ProductDB"
    db_pool_max_size: int = 10
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()

    origins = tuple(
        o.strip() for o in _env_str(env, "CORS_ORIGINS", "*").split(",") if o.strip()
    )
    pool_max = _env_int(env, "DB_POOL_MAX_SIZE", defaults.db_pool_max_size)

    return Settings(
        db_host=_env_str(env, "DB_HOST", defaults.db_host),
        db_port=_env_int(env, "DB_PORT", defaults.db_port),
        db_user=_env_str(env, "DB_USER", defaults.db_user),
        # Password may legitimately be empty, so no strip/fallback here.
        db_password=env.get("DB_PASSWORD", defaults.db_password),
        db_database=_env_str(env, "DB_DATABASE", defaults.db_database),
        db_pool_max_size=pool_max if pool_max > 0 else defaults.db_pool_max_size,
        host=_env_str(env, "HOST", defaults.host),
        port=_env_int(env, "PORT", defaults.port),
        log_level=_env_str(env, "LOG_LEVEL", defaults.log_level).upper(),
        cors_origins=origins or defaults.cors_origins,
    )
