from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from weatherapp.core.config import Settings
from weatherapp.models.location import Position

logger = logging.getLogger(__name__)

IP_LOCATION_URL = "https://ipapi.co/json/"


class LocationError(Exception):
    """The device position could not be resolved."""


class LocationProvider(Protocol):
    def has_permission(self) -> bool: ...

    async def current_position(self) -> Position | None: ...

    async def close(self) -> None: ...


class StaticLocationProvider:
    """Position fixed by configuration, e.g. a wall-mounted display."""

    def __init__(self, position: Position | None, *, granted: bool) -> None:
        self._position = position
        self._granted = granted

    def has_permission(self) -> bool:
        return self._granted

    async def current_position(self) -> Position | None:
        return self._position

    async def close(self) -> None:
        return None


class IpLocationProvider:
    """Approximate position from IP geolocation."""

    def __init__(
        self,
        *,
        url: str = IP_LOCATION_URL,
        timeout_seconds: float = 10.0,
        granted: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._granted = granted
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def has_permission(self) -> bool:
        return self._granted

    async def current_position(self) -> Position | None:
        try:
            resp = await self._client.get(self._url)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            raise LocationError(
                f"location service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise LocationError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise LocationError("location service returned a non-JSON body") from e

        position = _position_from_payload(payload)
        if position is None:
            logger.warning("Location service answered without coordinates")
        return position

    async def close(self) -> None:
        await self._client.aclose()


def _position_from_payload(payload: Any) -> Position | None:
    if not isinstance(payload, dict):
        return None
    lat = _float_or_none(payload.get("latitude"))
    lon = _float_or_none(payload.get("longitude"))
    if lat is None or lon is None:
        return None
    return Position(latitude=lat, longitude=lon)


def _float_or_none(v: Any) -> float | None:
    try:
        if v is None:
            return None
        return float(v)
    except (TypeError, ValueError):
        return None


def create_location_provider(settings: Settings) -> LocationProvider:
    if settings.location_provider == "ip":
        return IpLocationProvider(
            url=str(settings.ip_location_url),
            timeout_seconds=settings.timeout_seconds,
            granted=settings.location_permission_granted,
        )

    position: Position | None = None
    if settings.location_latitude is not None and settings.location_longitude is not None:
        position = Position(
            latitude=settings.location_latitude, longitude=settings.location_longitude
        )
    granted = settings.location_provider == "static" and settings.location_permission_granted
    return StaticLocationProvider(position, granted=granted)
