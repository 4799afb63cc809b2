"""Configuration helpers for the service settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "FLIGHT_PATH_TRACKER_"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, "1" if default else "0").strip().lower()
    return raw in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    secret_key: str = "change-me-flight-path-tracker-secret"
    admin_username: str = "admin"
    admin_password: str = "password"
    token_ttl_seconds: int = 86400
    jwt_algorithm: str = "HS256"
    seed_sample_data: bool = True
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        secret_key=_env("SECRET_KEY", "change-me-flight-path-tracker-secret"),
        admin_username=_env("ADMIN_USERNAME", "admin"),
        admin_password=_env("ADMIN_PASSWORD", "password"),
        token_ttl_seconds=int(_env("TOKEN_TTL_SECONDS", "86400")),
        jwt_algorithm=_env("JWT_ALGORITHM", "HS256"),
        seed_sample_data=_env_bool("SEED_SAMPLE_DATA", True),
        host=_env("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        log_level=_env("LOG_LEVEL", "INFO").strip().upper(),
    )
