"""Unit conversion and display formatting for weather readings."""

from __future__ import annotations

import math
from datetime import datetime, timezone

# =============================================================================
# Constants
# =============================================================================

ICON_BASE_URL = "https://openweathermap.org/img/wn"

_COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

# OpenWeatherMap condition groups: https://openweathermap.org/weather-conditions
_CONDITION_GROUPS = [
    (200, 300, "Thunderstorm"),
    (300, 400, "Drizzle"),
    (500, 600, "Rain"),
    (600, 700, "Snow"),
    (700, 800, "Atmosphere"),
    (800, 801, "Clear Sky"),
    (801, 900, "Cloudy"),
]

_UV_LEVELS = [
    (3.0, "Low"),
    (6.0, "Moderate"),
    (8.0, "High"),
    (11.0, "Very High"),
]

_TEMPERATURE_UNITS = {"metric": "°C", "imperial": "°F", "standard": "K"}
_WIND_SPEED_UNITS = {"metric": "m/s", "imperial": "mph", "standard": "m/s"}


# =============================================================================
# Temperature
# =============================================================================


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - 273.15


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return (kelvin - 273.15) * 9 / 5 + 32


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def to_celsius(value: float, units: str) -> float:
    """Convert a temperature reported in the given API unit system to Celsius."""
    if units == "imperial":
        return fahrenheit_to_celsius(value)
    if units == "standard":
        return kelvin_to_celsius(value)
    return value


def format_temperature(temperature: float, is_celsius: bool = True) -> str:
    """Round half up to a whole degree and append the unit, e.g. ``"27°C"``."""
    rounded = math.floor(temperature + 0.5)
    return f"{rounded}{'°C' if is_celsius else '°F'}"


def temperature_unit(units: str) -> str:
    return _TEMPERATURE_UNITS.get(units, "°C")


def heat_index(temperature_celsius: float, humidity: float) -> float:
    """
    Approximate apparent temperature (Rothfusz regression).

    The regression is defined in Fahrenheit, so the input is converted there
    and the result converted back to Celsius.
    """
    t = celsius_to_fahrenheit(temperature_celsius)
    h = humidity
    hi = (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * h
        - 0.22475541 * t * h
        - 0.00683783 * t * t
        - 0.05481717 * h * h
        + 0.00122874 * t * t * h
        + 0.00085282 * t * h * h
        - 0.00000199 * t * t * h * h
    )
    return fahrenheit_to_celsius(hi)


# =============================================================================
# Wind / conditions
# =============================================================================


def wind_direction(degrees: float) -> str:
    """Bucket a bearing into one of eight compass points (0 -> "N", 225 -> "SW")."""
    index = math.floor((degrees % 360) / 45.0 + 0.5) % len(_COMPASS_POINTS)
    return _COMPASS_POINTS[index]


def wind_speed_unit(units: str) -> str:
    return _WIND_SPEED_UNITS.get(units, "m/s")


def weather_condition_description(weather_id: int) -> str:
    for low, high, label in _CONDITION_GROUPS:
        if low <= weather_id < high:
            return label
    return "Unknown"


def uv_index_description(uv_index: float) -> str:
    for upper, label in _UV_LEVELS:
        if uv_index < upper:
            return label
    return "Extreme"


def icon_url(icon: str, size: str = "4x") -> str:
    return f"{ICON_BASE_URL}/{icon}@{size}.png"


# =============================================================================
# Distance / time
# =============================================================================


def format_visibility(visibility_meters: int) -> str:
    km = visibility_meters / 1000.0
    if km >= 10:
        return f"{km:.0f} km"
    return f"{km:.1f} km"


def _local_datetime(timestamp: int, utc_offset_seconds: int) -> datetime:
    return datetime.fromtimestamp(timestamp + utc_offset_seconds, tz=timezone.utc)


def format_time(timestamp: int, utc_offset_seconds: int = 0) -> str:
    """Format an epoch timestamp as ``HH:MM`` in the location's local time."""
    return _local_datetime(timestamp, utc_offset_seconds).strftime("%H:%M")


def format_date(timestamp: int, utc_offset_seconds: int = 0) -> str:
    return _local_datetime(timestamp, utc_offset_seconds).strftime("%b %d, %Y")
