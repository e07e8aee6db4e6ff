"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from checkup.catalog import ALLOWED_PHOTO_TYPES

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

_MB = 1024 * 1024


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


def _normalize_url(url: str) -> str:
    url = url.strip()
    if not url or url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


class PhotoPolicyConfig(BaseSettings):
    max_file_size: int = 5 * _MB
    max_per_property: int = 5
    max_total_size: int = 20 * _MB
    allowed_types: tuple[str, ...] = ALLOWED_PHOTO_TYPES
    inline_max_width: int = 1920
    inline_max_height: int = 1080
    inline_quality: int = 80

    model_config = SettingsConfigDict(env_prefix="PHOTOS_", frozen=True)


class ObjectStorageConfig(BaseSettings):
    enabled: bool = False
    provider: Literal["aws-s3", "generic", "azure-blob"] = "aws-s3"
    endpoint: str = ""
    region: str = "us-east-1"
    bucket: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    path_prefix: str = "office-health-checkup"
    public_url: str = ""

    model_config = SettingsConfigDict(env_prefix="OBS_", frozen=True)

    @field_validator("endpoint", "public_url")
    @classmethod
    def _with_scheme(cls, v: str) -> str:
        return _normalize_url(v)

    @property
    def is_configured(self) -> bool:
        """Enabled and carrying everything an upload needs."""
        return bool(
            self.enabled
            and self.provider
            and self.bucket
            and self.access_key_id
            and self.secret_access_key
        )


class WebhookConfig(BaseSettings):
    url: str = ""
    key: str = ""
    timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="WEBHOOK_", frozen=True)


class AuthConfig(BaseSettings):
    login_domain: str = "healthoffice.local"
    session_max_age_days: int = 7

    model_config = SettingsConfigDict(env_prefix="AUTH_", frozen=True)


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/checkup.db"
    auth_database_url: str = "sqlite+aiosqlite:///data/auth.db"
    summary_strategy: Literal["memory", "database"] = "memory"
    log_level: str = "INFO"
    photos: PhotoPolicyConfig = Field(default_factory=PhotoPolicyConfig)
    object_storage: ObjectStorageConfig = Field(default_factory=ObjectStorageConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True)


def load_settings(data: dict | None = None) -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _load_yaml() if data is None else data
    database = y.get("database", {})
    kwargs = {
        "photos": PhotoPolicyConfig(**y.get("photos", {})),
        "object_storage": ObjectStorageConfig(**y.get("object_storage", {})),
        "webhook": WebhookConfig(**y.get("webhook", {})),
        "auth": AuthConfig(**y.get("auth", {})),
    }
    if "url" in database:
        kwargs["database_url"] = database["url"]
    if "auth_url" in database:
        kwargs["auth_database_url"] = database["auth_url"]
    for key in ("summary_strategy", "log_level"):
        if key in y:
            kwargs[key] = y[key]
    return Settings(**kwargs)


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
