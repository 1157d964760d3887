from __future__ import annotations

from dataclasses import dataclass

from weatherapp.models.weather import WeatherReading


@dataclass(frozen=True)
class UiState:
    is_loading: bool = False
    weather: WeatherReading | None = None
    error: str | None = None
    last_searched_city: str | None = None
