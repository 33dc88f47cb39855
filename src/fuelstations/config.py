from __future__ import annotations

import os


def _get_env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def port() -> int:
    return int(_get_env("PORT", "4000"))


def host() -> str:
    return _get_env("HOST", "0.0.0.0")


def jwt_key() -> str:
    return _get_env("JWT_KEY", "secret")


def database_path() -> str:
    return _get_env("DATABASE_PATH", "gas_stations.db")


# Reserved for a networked database; the embedded store does not read them.
def db_user() -> str:
    return _get_env("DB_USER", "root")


def db_password() -> str:
    return _get_env("DB_PASSWORD", "autosensechallengesecure")


def db_name() -> str:
    return _get_env("DB_NAME", "autosense")


def log_level() -> str:
    return _get_env("LOG_LEVEL", "INFO").upper()
