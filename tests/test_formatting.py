from __future__ import annotations

import pytest

from weatherapp.utils import formatting


def test_kelvin_conversions() -> None:
    assert formatting.kelvin_to_celsius(300.0) == pytest.approx(26.85, abs=0.01)
    assert formatting.kelvin_to_fahrenheit(300.0) == pytest.approx(80.33, abs=0.01)
    assert formatting.kelvin_to_celsius(273.15) == pytest.approx(0.0)


def test_to_celsius_follows_unit_system() -> None:
    assert formatting.to_celsius(212.0, "imperial") == pytest.approx(100.0)
    assert formatting.to_celsius(300.0, "standard") == pytest.approx(26.85, abs=0.01)
    assert formatting.to_celsius(21.5, "metric") == 21.5


@pytest.mark.parametrize(
    ("value", "is_celsius", "expected"),
    [
        (26.85, True, "27°C"),
        (80.33, False, "80°F"),
        (20.5, True, "21°C"),
        (-3.2, True, "-3°C"),
    ],
)
def test_format_temperature(value: float, is_celsius: bool, expected: str) -> None:
    assert formatting.format_temperature(value, is_celsius) == expected


@pytest.mark.parametrize(
    ("degrees", "expected"),
    [(0, "N"), (90, "E"), (225, "SW"), (359, "N"), (22, "N"), (23, "NE"), (720, "N"), (-90, "W")],
)
def test_wind_direction(degrees: int, expected: str) -> None:
    assert formatting.wind_direction(degrees) == expected


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (800, "Clear Sky"),
        (201, "Thunderstorm"),
        (999, "Unknown"),
        (310, "Drizzle"),
        (502, "Rain"),
        (601, "Snow"),
        (741, "Atmosphere"),
        (804, "Cloudy"),
        (450, "Unknown"),
    ],
)
def test_weather_condition_description(code: int, expected: str) -> None:
    assert formatting.weather_condition_description(code) == expected


def test_heat_index_is_hotter_than_air_in_humid_heat() -> None:
    # 32°C at 70% humidity feels around 40°C.
    assert formatting.heat_index(32.0, 70) == pytest.approx(40.4, abs=0.3)


def test_format_visibility() -> None:
    assert formatting.format_visibility(10000) == "10 km"
    assert formatting.format_visibility(16093) == "16 km"
    assert formatting.format_visibility(4500) == "4.5 km"
    assert formatting.format_visibility(0) == "0.0 km"


def test_format_time_and_date_apply_offset() -> None:
    # 2023-11-14T22:13:20Z
    assert formatting.format_time(1700000000) == "22:13"
    assert formatting.format_time(1700000000, -18000) == "17:13"
    assert formatting.format_date(1700000000) == "Nov 14, 2023"
    assert formatting.format_date(1700000000, 7200) == "Nov 15, 2023"


@pytest.mark.parametrize(
    ("uvi", "expected"),
    [(0.5, "Low"), (3.0, "Moderate"), (7.9, "High"), (10.0, "Very High"), (11.0, "Extreme")],
)
def test_uv_index_description(uvi: float, expected: str) -> None:
    assert formatting.uv_index_description(uvi) == expected


def test_units_and_icon_url() -> None:
    assert formatting.temperature_unit("imperial") == "°F"
    assert formatting.temperature_unit("standard") == "K"
    assert formatting.wind_speed_unit("imperial") == "mph"
    assert formatting.wind_speed_unit("metric") == "m/s"
    assert formatting.icon_url("04d") == "https://openweathermap.org/img/wn/04d@4x.png"
