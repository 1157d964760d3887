from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from weatherapp.models.outcome import FetchOutcome


class WeatherRepository(Protocol):
    def get_weather_by_city(self, city_name: str) -> AsyncIterator[FetchOutcome]: ...

    def get_weather_by_coordinates(
        self, latitude: float, longitude: float
    ) -> AsyncIterator[FetchOutcome]: ...

    def save_last_searched_city(self, city_name: str) -> None: ...

    def get_last_searched_city(self) -> str | None: ...
