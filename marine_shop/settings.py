# marine_shop/settings.py
from __future__ import annotations
from typing import List, Optional
from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict
import json

_DEFAULT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _parse_cors(v: Optional[str | List[str]]) -> List[str]:
    """
    Accept JSON array (e.g. '["http://localhost:3000"]') or
    comma-separated string ('http://localhost:3000,http://127.0.0.1:3000').
    """
    if v is None:
        return list(_DEFAULT_ORIGINS)
    if isinstance(v, list):
        return v
    s = v.strip()
    if not s:
        return list(_DEFAULT_ORIGINS)
    if s.startswith("["):
        try:
            parsed = json.loads(s)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list) and all(isinstance(x, str) for x in parsed):
            return parsed
    return [p.strip() for p in s.split(",") if p.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",   # ignore unknown env keys instead of raising
    )

    # --- API ---
    api_host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("API_HOST",))
    api_port: int = Field(default=8000,        validation_alias=AliasChoices("API_PORT",))
    cors_origins_raw: Optional[str | List[str]] = Field(
        default=None, validation_alias=AliasChoices("CORS_ORIGINS",)
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL",))

    # --- Postgres ---
    database_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL",)
    )
    db_pool_min: int = Field(default=2,  validation_alias=AliasChoices("DB_POOL_MIN",))
    db_pool_max: int = Field(default=10, validation_alias=AliasChoices("DB_POOL_MAX",))
    # create tables on startup; tests switch this off
    db_init_on_startup: bool = Field(
        default=True, validation_alias=AliasChoices("DB_INIT_ON_STARTUP",)
    )

    # --- Admin ---
    admin_username: str = Field(default="admin", validation_alias=AliasChoices("ADMIN_USERNAME",))
    admin_password: str = Field(default="admin123", validation_alias=AliasChoices("ADMIN_PASSWORD",))
    # what the admin frontend stores and sends back as a Bearer token
    admin_token: str = Field(default="ok-admin", validation_alias=AliasChoices("ADMIN_TOKEN",))

    @property
    def cors_origins(self) -> List[str]:
        return _parse_cors(self.cors_origins_raw)


# singleton
settings = Settings()
