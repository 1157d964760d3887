from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Coroutine
from dataclasses import replace
from typing import Any

from weatherapp.clients.location import LocationError, LocationProvider
from weatherapp.models.outcome import Failed, FetchOutcome, Pending, Succeeded
from weatherapp.models.ui_state import UiState
from weatherapp.repositories.weather import WeatherRepository
from weatherapp.services.observable import ObservableState

logger = logging.getLogger(__name__)

BLANK_CITY_MESSAGE = "Please enter a city name"
LOCATION_PERMISSION_MESSAGE = "Location permission not granted"
LOCATION_UNAVAILABLE_MESSAGE = "Unable to get current location. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class WeatherStateHolder:
    """
    Owns the weather screen state and the commands that change it.

    Commands must be called from the event loop that renders the state.
    Each command that starts a fetch schedules it as a task on that loop
    and returns the task; the caller may await it or ignore it.

    Every fetch is tagged with a generation number. Starting a new fetch
    supersedes the previous one, and outcomes that arrive for a superseded
    fetch are dropped instead of overwriting newer state.
    """

    def __init__(
        self,
        *,
        repository: WeatherRepository,
        location_provider: LocationProvider,
    ) -> None:
        self._repository = repository
        self._location = location_provider
        self._state: ObservableState[UiState] = ObservableState(UiState())
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ObservableState[UiState]:
        return self._state

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def initialize(self) -> asyncio.Task[None] | None:
        if self._location.has_permission():
            logger.info("Location permission granted, loading weather for current position")
            return self.fetch_weather_by_location()

        # The auto-load must take its generation before any later command.
        last_city = (self._repository.get_last_searched_city() or "").strip()
        if not last_city:
            logger.info("No saved city, staying idle")
            return None

        logger.info("Auto-loading weather for saved city %r", last_city)
        self._update(last_searched_city=last_city)
        return self.search_weather_by_city(last_city)

    def search_weather_by_city(self, city_name: str) -> asyncio.Task[None] | None:
        city = city_name.strip()
        if not city:
            self._update(error=BLANK_CITY_MESSAGE)
            return None

        generation = self._next_generation()
        return self._launch(
            self._collect(
                self._repository.get_weather_by_city(city),
                generation=generation,
                city_name=city,
            )
        )

    def fetch_weather_by_location(self) -> asyncio.Task[None] | None:
        if not self._location.has_permission():
            self._update(error=LOCATION_PERMISSION_MESSAGE)
            return None

        generation = self._next_generation()
        self._update(is_loading=True, error=None)
        return self._launch(self._fetch_by_location(generation))

    def clear_error(self) -> None:
        self._update(error=None)

    def saved_city(self) -> str | None:
        return self._repository.get_last_searched_city()

    async def wait_idle(self) -> None:
        """Wait until every scheduled command has finished."""
        while self._tasks:
            results = await asyncio.gather(*list(self._tasks), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error("Weather command failed: %r", result)

    async def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _fetch_by_location(self, generation: int) -> None:
        try:
            position = await self._location.current_position()
        except LocationError as e:
            self._update_if_current(generation, is_loading=False, error=f"Failed to get location: {e}")
            return
        except Exception as e:  # noqa: BLE001 - any resolver failure is shown to the user
            logger.exception("Location provider failed")
            self._update_if_current(generation, is_loading=False, error=f"Failed to get location: {e}")
            return

        if position is None:
            self._update_if_current(
                generation, is_loading=False, error=LOCATION_UNAVAILABLE_MESSAGE
            )
            return

        await self._collect(
            self._repository.get_weather_by_coordinates(position.latitude, position.longitude),
            generation=generation,
            city_name=None,
        )

    async def _collect(
        self,
        outcomes: AsyncIterator[FetchOutcome],
        *,
        generation: int,
        city_name: str | None,
    ) -> None:
        async for outcome in outcomes:
            if generation != self._generation:
                # Keep draining so the repository finishes its side effects.
                logger.debug("Dropping %s from superseded fetch #%d", type(outcome).__name__, generation)
                continue
            self._state.set(_reduce(self._state.value, outcome, city_name))

    def _launch(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _update(self, **changes: Any) -> None:
        self._state.set(replace(self._state.value, **changes))

    def _update_if_current(self, generation: int, **changes: Any) -> None:
        if generation == self._generation:
            self._update(**changes)


def _reduce(state: UiState, outcome: FetchOutcome, city_name: str | None) -> UiState:
    if isinstance(outcome, Pending):
        return replace(state, is_loading=True, error=None)
    if isinstance(outcome, Succeeded):
        reading = outcome.reading
        return replace(
            state,
            is_loading=False,
            weather=reading,
            error=None,
            last_searched_city=city_name if city_name is not None else reading.location_name,
        )
    if isinstance(outcome, Failed):
        # The previous reading stays visible next to the error.
        return replace(state, is_loading=False, error=outcome.message or UNEXPECTED_ERROR_MESSAGE)
    raise TypeError(f"Unknown fetch outcome: {outcome!r}")
