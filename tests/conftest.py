"""Shared fixtures for the EcoVista wallpaper API tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ecovista.apis.deps import get_wallpaper_service
from ecovista.core.config import Settings
from ecovista.core.rate_limit import limiter
from ecovista.main import app
from ecovista.services.wallpaper_service import WallpaperService

UPSTREAM_URL = "https://upstream.test/api/v1/generate-ai-image"


@pytest.fixture
def upstream_url() -> str:
    return UPSTREAM_URL


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        DUMPLING_AI_KEY="test-key",
        DUMPLING_AI_URL=UPSTREAM_URL,
        GENERATION_TIMEOUT=5,
    )


@pytest.fixture
def wallpaper_service(test_settings: Settings) -> WallpaperService:
    return WallpaperService(test_settings)


@pytest.fixture(autouse=True)
def reset_rate_limits() -> Iterator[None]:
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client(wallpaper_service: WallpaperService) -> Iterator[TestClient]:
    app.dependency_overrides[get_wallpaper_service] = lambda: wallpaper_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
