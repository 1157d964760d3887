from __future__ import annotations

from pydantic import BaseModel, Field

from weatherapp.models.ui_state import UiState
from weatherapp.models.weather import WeatherReading
from weatherapp.utils import formatting


class CitySearchRequest(BaseModel):
    city: str = Field(max_length=128)


class LastCityResponse(BaseModel):
    city: str | None = None


class WeatherDisplay(BaseModel):
    location: str
    condition: str | None = None
    condition_group: str | None = None
    icon_url: str | None = None
    temperature: str
    feels_like: str
    temp_min: str
    temp_max: str
    heat_index: str
    humidity: str
    pressure: str
    wind: str
    wind_direction: str
    visibility: str
    cloudiness: str
    sunrise: str
    sunset: str
    observed_on: str

    @classmethod
    def from_reading(cls, reading: WeatherReading, units: str) -> "WeatherDisplay":
        main = reading.main
        condition = reading.primary_condition
        location = reading.location_name
        if reading.country:
            location = f"{location}, {reading.country}"

        offset = reading.timezone
        return cls(
            location=location,
            condition=condition.description.capitalize() if condition else None,
            condition_group=(
                formatting.weather_condition_description(condition.id) if condition else None
            ),
            icon_url=formatting.icon_url(condition.icon) if condition else None,
            temperature=_temperature(main.temperature, units),
            feels_like=_temperature(main.feels_like, units),
            temp_min=_temperature(main.temp_min, units),
            temp_max=_temperature(main.temp_max, units),
            heat_index=_temperature_from_celsius(
                formatting.heat_index(formatting.to_celsius(main.temperature, units), main.humidity),
                units,
            ),
            humidity=f"{main.humidity}%",
            pressure=f"{main.pressure} hPa",
            wind=f"{reading.wind.speed:.1f} {formatting.wind_speed_unit(units)}",
            wind_direction=formatting.wind_direction(reading.wind.degrees),
            visibility=formatting.format_visibility(reading.visibility),
            cloudiness=f"{reading.clouds.cloudiness}%",
            sunrise=formatting.format_time(reading.sys.sunrise, offset),
            sunset=formatting.format_time(reading.sys.sunset, offset),
            observed_on=formatting.format_date(reading.timestamp, offset),
        )


class WeatherPayload(BaseModel):
    reading: WeatherReading
    display: WeatherDisplay


class UiStateResponse(BaseModel):
    is_loading: bool = False
    weather: WeatherPayload | None = None
    error: str | None = None
    last_searched_city: str | None = None

    @classmethod
    def from_state(cls, state: UiState, *, units: str) -> "UiStateResponse":
        weather = None
        if state.weather is not None:
            weather = WeatherPayload(
                reading=state.weather,
                display=WeatherDisplay.from_reading(state.weather, units),
            )
        return cls(
            is_loading=state.is_loading,
            weather=weather,
            error=state.error,
            last_searched_city=state.last_searched_city,
        )


def _temperature(value: float, units: str) -> str:
    if units == "standard":
        return formatting.format_temperature(formatting.kelvin_to_celsius(value))
    return formatting.format_temperature(value, is_celsius=units != "imperial")


def _temperature_from_celsius(value: float, units: str) -> str:
    if units == "imperial":
        return formatting.format_temperature(
            formatting.celsius_to_fahrenheit(value), is_celsius=False
        )
    return formatting.format_temperature(value)
