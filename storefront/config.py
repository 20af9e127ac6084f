from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

_PACKAGE_DIR = Path(__file__).resolve().parent

DEVELOPMENT_BASE_URL = "http://localhost:3001"
PRODUCTION_BASE_URL = "https://api.storefront.example.com"


def _load_env() -> None:
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)


_load_env()


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_list(key: str) -> list[str]:
    value = os.getenv(key)
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str = field(
        default_factory=lambda: _get_env("DATABASE_URL", "sqlite:///./storefront-overlay.db")
    )
    data_source: str = field(
        default_factory=lambda: _get_env("STOREFRONT_DATA_SOURCE", str(_PACKAGE_DIR / "mock_data"))
    )
    asset_dir: str = field(
        default_factory=lambda: _get_env("STOREFRONT_ASSET_DIR", str(_PACKAGE_DIR / "assets"))
    )
    use_mock: bool = field(default_factory=lambda: _get_bool("STOREFRONT_USE_MOCK", True))
    environment: str = field(default_factory=lambda: _get_env("STOREFRONT_ENV", "development") or "development")
    api_base_url: str | None = field(default_factory=lambda: _get_env("API_BASE_URL"))
    locale: str = field(default_factory=lambda: _get_env("STOREFRONT_LOCALE", "en") or "en")
    placeholder_image: str = field(
        default_factory=lambda: _get_env("PLACEHOLDER_IMAGE", "/assets/placeholder.svg")
    )
    dataset_cache: bool = field(default_factory=lambda: _get_bool("DATASET_CACHE", True))
    remote_timeout_seconds: float = field(default_factory=lambda: _get_float("REMOTE_TIMEOUT_SECONDS", 30.0))
    exchange_rate_url: str = field(
        default_factory=lambda: _get_env("EXCHANGE_RATE_URL", "https://api.exchangerate-api.com/v4/latest/SAR")
    )
    cors_allow_origins: list[str] = field(default_factory=lambda: _get_list("CORS_ALLOW_ORIGINS"))
    log_dir: str | None = field(default_factory=lambda: _get_env("STOREFRONT_LOG_DIR"))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO") or "INFO")

    @property
    def base_url(self) -> str:
        """Remote backend root: explicit override first, then per-environment default."""
        if self.api_base_url:
            return self.api_base_url.rstrip("/")
        if self.environment == "production":
            return PRODUCTION_BASE_URL
        return DEVELOPMENT_BASE_URL


_settings: Settings | None = None
_runtime_overrides: dict[str, Any] = {}


def _apply_runtime_overrides(settings: Settings) -> None:
    if not _runtime_overrides:
        return
    for key, value in _runtime_overrides.items():
        if value is None:
            continue
        if hasattr(settings, key):
            setattr(settings, key, value)


def update_runtime_overrides(overrides: dict[str, Any]) -> None:
    if not overrides:
        return
    for key, value in overrides.items():
        if value is None:
            continue
        _runtime_overrides[key] = value
    if _settings is not None:
        _apply_runtime_overrides(_settings)


def clear_runtime_overrides() -> None:
    _runtime_overrides.clear()


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    _apply_runtime_overrides(_settings)
    return _settings


def refresh_settings() -> Settings:
    """Rebuild settings from environment variables."""
    global _settings
    _settings = Settings()
    _apply_runtime_overrides(_settings)
    return _settings


__all__ = [
    "DEVELOPMENT_BASE_URL",
    "PRODUCTION_BASE_URL",
    "Settings",
    "get_settings",
    "refresh_settings",
    "update_runtime_overrides",
    "clear_runtime_overrides",
]
