from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator
from typing import Any

from weatherapp.clients.location import LocationError
from weatherapp.models.location import Position
from weatherapp.models.outcome import FetchOutcome, Pending
from weatherapp.models.weather import WeatherReading

SAMPLE_PAYLOAD: dict[str, Any] = {
    "coord": {"lon": -71.0598, "lat": 42.3584},
    "weather": [
        {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}
    ],
    "base": "stations",
    "main": {
        "temp": 68.4,
        "feels_like": 67.9,
        "temp_min": 65.1,
        "temp_max": 71.2,
        "pressure": 1014,
        "humidity": 62,
        "sea_level": 1014,
        "grnd_level": 1012,
    },
    "visibility": 10000,
    "wind": {"speed": 9.22, "deg": 225, "gust": 14.97},
    "clouds": {"all": 75},
    "dt": 1700000000,
    "sys": {"type": 2, "id": 2013408, "country": "US", "sunrise": 1699960000, "sunset": 1699996000},
    "timezone": -18000,
    "id": 4930956,
    "name": "Boston",
    "cod": 200,
}


def sample_payload(**overrides: Any) -> dict[str, Any]:
    payload = copy.deepcopy(SAMPLE_PAYLOAD)
    payload.update(overrides)
    return payload


def sample_reading(name: str = "Boston", **overrides: Any) -> WeatherReading:
    return WeatherReading.model_validate(sample_payload(name=name, **overrides))


class FakeWeatherClient:
    """Stands in for OpenWeatherClient; records every query it receives."""

    def __init__(
        self,
        *,
        reading: WeatherReading | None = None,
        error: Exception | None = None,
    ) -> None:
        self.reading = reading or sample_reading()
        self.error = error
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    async def close(self) -> None:
        self.closed = True

    async def fetch_by_city(self, city_name: str, *, api_key: str, units: str) -> WeatherReading:
        self.calls.append(("city", city_name, api_key, units))
        if self.error is not None:
            raise self.error
        return self.reading

    async def fetch_by_coordinates(
        self, latitude: float, longitude: float, *, api_key: str, units: str
    ) -> WeatherReading:
        self.calls.append(("coordinates", latitude, longitude, api_key, units))
        if self.error is not None:
            raise self.error
        return self.reading


class InMemoryLastCityStore:
    def __init__(self, city: str | None = None) -> None:
        self.city = city
        self.writes: list[str] = []

    def get_last_city(self) -> str | None:
        return self.city

    def set_last_city(self, city_name: str) -> None:
        self.city = city_name
        self.writes.append(city_name)


class FakeLocationProvider:
    def __init__(
        self,
        *,
        granted: bool = True,
        position: Position | None = Position(42.3584, -71.0598),
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.granted = granted
        self.position = position
        self.error = error
        self.gate = gate
        self.resolve_count = 0

    def has_permission(self) -> bool:
        return self.granted

    async def current_position(self) -> Position | None:
        self.resolve_count += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.position

    async def close(self) -> None:
        return None


class ScriptedWeatherRepository:
    """
    Replays a fixed outcome script per call.

    ``gates`` maps a city name to an ``asyncio.Event``; the terminal
    outcome for that city is held back until the event is set.
    ``coordinate_gate`` does the same for coordinate lookups.
    """

    def __init__(
        self,
        *,
        terminal: FetchOutcome,
        last_city: str | None = None,
        gates: dict[str, asyncio.Event] | None = None,
        coordinate_gate: asyncio.Event | None = None,
    ) -> None:
        self.terminal = terminal
        self.last_city = last_city
        self.gates = gates or {}
        self.coordinate_gate = coordinate_gate
        self.city_calls: list[str] = []
        self.coordinate_calls: list[tuple[float, float]] = []
        self.terminals_by_city: dict[str, FetchOutcome] = {}

    async def get_weather_by_city(self, city_name: str) -> AsyncIterator[FetchOutcome]:
        self.city_calls.append(city_name)
        yield Pending()
        gate = self.gates.get(city_name)
        if gate is not None:
            await gate.wait()
        yield self.terminals_by_city.get(city_name, self.terminal)

    async def get_weather_by_coordinates(
        self, latitude: float, longitude: float
    ) -> AsyncIterator[FetchOutcome]:
        self.coordinate_calls.append((latitude, longitude))
        yield Pending()
        if self.coordinate_gate is not None:
            await self.coordinate_gate.wait()
        yield self.terminal

    def save_last_searched_city(self, city_name: str) -> None:
        self.last_city = city_name

    def get_last_searched_city(self) -> str | None:
        return self.last_city


def location_failure(message: str = "GPS timeout") -> LocationError:
    return LocationError(message)
