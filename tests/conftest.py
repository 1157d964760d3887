from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from weatherapp.api import deps
from weatherapp.core.config import Settings
from weatherapp.factory import create_app
from weatherapp.repositories.weather_remote import RemoteWeatherRepository
from weatherapp.services.weather import WeatherStateHolder
from tests.fakes import FakeLocationProvider, FakeWeatherClient, InMemoryLastCityStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        api_key="test-api-key",
        api_base_url="http://weather.test",
        units="imperial",
        timeout_seconds=1.0,
        preferences_path=tmp_path / "weather_preferences.json",
        location_provider="none",
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
    )


@pytest.fixture()
def weather_client() -> FakeWeatherClient:
    return FakeWeatherClient()


@pytest.fixture()
def store() -> InMemoryLastCityStore:
    return InMemoryLastCityStore()


@pytest.fixture()
def location() -> FakeLocationProvider:
    return FakeLocationProvider(granted=False)


@pytest.fixture()
def repository(
    weather_client: FakeWeatherClient, store: InMemoryLastCityStore
) -> RemoteWeatherRepository:
    return RemoteWeatherRepository(
        client=weather_client, store=store, api_key="test-api-key", units="imperial"
    )


@pytest.fixture()
def client(
    settings: Settings,
    repository: RemoteWeatherRepository,
    location: FakeLocationProvider,
) -> TestClient:
    app = create_app(settings)
    holder = WeatherStateHolder(repository=repository, location_provider=location)
    app.dependency_overrides[deps.get_state_holder] = lambda: holder
    with TestClient(app) as client:
        yield client
