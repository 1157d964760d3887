from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from weatherapp.models.weather import WeatherReading

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
CURRENT_WEATHER_PATH = "/data/2.5/weather"


class WeatherClientError(Exception):
    """Base class for failures talking to the weather API."""


class WeatherHttpError(WeatherClientError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, detail: str | None = None) -> None:
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        message = f"HTTP {status_code}: {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class WeatherTransportError(WeatherClientError):
    """No response was received (DNS failure, timeout, connection reset...)."""


class WeatherPayloadError(WeatherClientError):
    """A 2xx response whose body is not a usable weather reading."""


class OpenWeatherClient:
    def __init__(
        self,
        *,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout_seconds: float = 30.0,
        user_agent: str = "weatherapp/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_by_city(self, city_name: str, *, api_key: str, units: str) -> WeatherReading:
        query = city_name.strip()
        if not query:
            raise ValueError("City name must not be blank")
        return await self._fetch({"q": query, "appid": api_key, "units": units})

    async def fetch_by_coordinates(
        self, latitude: float, longitude: float, *, api_key: str, units: str
    ) -> WeatherReading:
        return await self._fetch(
            {"lat": latitude, "lon": longitude, "appid": api_key, "units": units}
        )

    async def _fetch(self, params: dict[str, Any]) -> WeatherReading:
        safe_params = {k: v for k, v in params.items() if k != "appid"}
        logger.info("Requesting current weather: %s", safe_params)

        try:
            resp = await self._client.get(CURRENT_WEATHER_PATH, params=params)
        except httpx.TransportError as e:
            logger.warning("Weather request failed before a response: %s", e)
            raise WeatherTransportError(str(e) or e.__class__.__name__) from e

        logger.info("Weather API response status: %s", resp.status_code)
        if not resp.is_success:
            raise WeatherHttpError(
                resp.status_code,
                resp.reason_phrase or f"HTTP {resp.status_code}",
                _error_detail(resp),
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise WeatherPayloadError("Weather API returned a non-JSON body") from e

        try:
            reading = WeatherReading.model_validate(payload)
        except ValidationError as e:
            logger.warning("Unexpected weather payload shape: %s", e)
            raise WeatherPayloadError("Unexpected weather response shape") from e

        logger.debug(
            "Parsed reading for %s (%s): %s",
            reading.location_name,
            reading.country,
            reading.main.temperature,
        )
        return reading


def _error_detail(resp: httpx.Response) -> str | None:
    # OpenWeatherMap error bodies look like {"cod": 401, "message": "Invalid API key..."}
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
