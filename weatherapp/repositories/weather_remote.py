from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from weatherapp.clients.openweather import (
    OpenWeatherClient,
    WeatherHttpError,
    WeatherTransportError,
)
from weatherapp.models.outcome import Failed, FetchOutcome, Pending, Succeeded
from weatherapp.repositories.preferences import LastCityStore

logger = logging.getLogger(__name__)

# City searches are restricted to US cities unless the query names a country.
DEFAULT_COUNTRY_QUALIFIER = "US"

BLANK_CITY_MESSAGE = "Please enter a city name"
CITY_NOT_FOUND_MESSAGE = "City not found. Please check the city name."
LOCATION_NOT_FOUND_MESSAGE = "Location not found."
INVALID_API_KEY_MESSAGE = "Invalid API key. Please check your configuration."
RATE_LIMITED_MESSAGE = "Too many requests. Please try again later."
CONNECTIVITY_MESSAGE = "Network connection error. Please check your internet connection."


def build_city_query(city_name: str) -> str:
    city = city_name.strip()
    if "," in city:
        return city
    return f"{city},{DEFAULT_COUNTRY_QUALIFIER}"


def http_error_message(error: WeatherHttpError, *, not_found: str) -> str:
    if error.status_code == 404:
        return not_found
    if error.status_code == 401:
        return INVALID_API_KEY_MESSAGE
    if error.status_code == 429:
        return RATE_LIMITED_MESSAGE
    return f"Failed to fetch weather data: {error.reason}"


class RemoteWeatherRepository:
    def __init__(
        self,
        *,
        client: OpenWeatherClient,
        store: LastCityStore,
        api_key: str,
        units: str = "imperial",
    ) -> None:
        self._client = client
        self._store = store
        self._api_key = api_key
        self._units = units

    async def get_weather_by_city(self, city_name: str) -> AsyncIterator[FetchOutcome]:
        yield Pending()

        city = city_name.strip()
        if not city:
            yield Failed(BLANK_CITY_MESSAGE)
            return

        query = build_city_query(city)
        try:
            reading = await self._client.fetch_by_city(
                query, api_key=self._api_key, units=self._units
            )
        except WeatherHttpError as e:
            logger.warning("City lookup for %r failed: %s", query, e)
            yield Failed(http_error_message(e, not_found=CITY_NOT_FOUND_MESSAGE))
            return
        except WeatherTransportError as e:
            logger.warning("City lookup for %r could not reach the API: %s", query, e)
            yield Failed(CONNECTIVITY_MESSAGE)
            return
        except Exception as e:  # noqa: BLE001 - surfaced to the user as text
            logger.exception("Unexpected error looking up %r", query)
            yield Failed(_unexpected_message(e))
            return

        yield Succeeded(reading)
        self._remember(city)

    async def get_weather_by_coordinates(
        self, latitude: float, longitude: float
    ) -> AsyncIterator[FetchOutcome]:
        yield Pending()

        try:
            reading = await self._client.fetch_by_coordinates(
                latitude, longitude, api_key=self._api_key, units=self._units
            )
        except WeatherHttpError as e:
            logger.warning("Lookup for (%s, %s) failed: %s", latitude, longitude, e)
            yield Failed(http_error_message(e, not_found=LOCATION_NOT_FOUND_MESSAGE))
            return
        except WeatherTransportError as e:
            logger.warning(
                "Lookup for (%s, %s) could not reach the API: %s", latitude, longitude, e
            )
            yield Failed(CONNECTIVITY_MESSAGE)
            return
        except Exception as e:  # noqa: BLE001 - surfaced to the user as text
            logger.exception("Unexpected error looking up (%s, %s)", latitude, longitude)
            yield Failed(_unexpected_message(e))
            return

        yield Succeeded(reading)
        self._remember(reading.location_name)

    def save_last_searched_city(self, city_name: str) -> None:
        self._store.set_last_city(city_name)

    def get_last_searched_city(self) -> str | None:
        return self._store.get_last_city()

    def _remember(self, city_name: str) -> None:
        # The reading is already delivered; only the next auto-load is affected.
        try:
            self._store.set_last_city(city_name)
        except OSError as e:
            logger.warning("Could not persist last searched city %r: %s", city_name, e)


def _unexpected_message(error: Exception) -> str:
    return f"Unexpected error: {str(error) or 'Unknown error'}"
