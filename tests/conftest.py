import asyncio
from pathlib import Path

import pytest

from storefront.backend import build_backend
from storefront.config import clear_runtime_overrides, refresh_settings
from storefront.db.database import Database

PACKAGE_DIR = Path(__file__).resolve().parents[1] / "storefront"
MOCK_DATA_DIR = PACKAGE_DIR / "mock_data"
ASSET_DIR = PACKAGE_DIR / "assets"


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'overlay.db'}")
    monkeypatch.setenv("STOREFRONT_DATA_SOURCE", str(MOCK_DATA_DIR))
    monkeypatch.setenv("STOREFRONT_ASSET_DIR", str(ASSET_DIR))
    monkeypatch.setenv("STOREFRONT_USE_MOCK", "true")
    monkeypatch.setenv("STOREFRONT_ENV", "development")
    monkeypatch.delenv("API_BASE_URL", raising=False)
    monkeypatch.delenv("PLACEHOLDER_IMAGE", raising=False)
    monkeypatch.delenv("STOREFRONT_LOCALE", raising=False)
    monkeypatch.delenv("STOREFRONT_LOG_DIR", raising=False)
    clear_runtime_overrides()
    return refresh_settings()


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    yield db
    db.engine.dispose()


@pytest.fixture
def backend(settings, database):
    return build_backend(settings, database=database)


@pytest.fixture
def call(backend):
    def _call(path, method="GET", body=None, headers=None):
        return asyncio.run(backend.router.request(path, method=method, body=body, headers=headers))

    return _call
