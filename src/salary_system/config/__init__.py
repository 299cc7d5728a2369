from __future__ import annotations

import importlib
import os
from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_TOKEN_TTL_SECONDS


def get_settings_module() -> str:
    # APP_ENV picks the settings module, default is 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return f"{__name__}.production"

    if env in {"test", "testing"}:
        return f"{__name__}.testing"

    return f"{__name__}.development"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed down."""

    secret_key: str
    jwt_secret: str
    db_config: dict = field(default_factory=dict)
    debug: bool = False
    testing: bool = False
    auto_init_db: bool = False
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD
    log_level: str = "INFO"
    static_dir: Optional[str] = None


def load_settings(module_name: Optional[str] = None) -> Settings:
    settings = importlib.import_module(module_name or get_settings_module())
    secret_key = getattr(settings, "SECRET_KEY")
    return Settings(
        secret_key=secret_key,
        jwt_secret=getattr(settings, "JWT_SECRET", None) or secret_key,
        db_config=dict(getattr(settings, "DB_CONFIG", {})),
        debug=bool(getattr(settings, "DEBUG", False)),
        testing=bool(getattr(settings, "TESTING", False)),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        token_ttl_seconds=int(getattr(settings, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)),
        password_hash_method=getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        static_dir=getattr(settings, "STATIC_DIR", None),
    )
