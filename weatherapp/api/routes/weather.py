from __future__ import annotations

from fastapi import APIRouter

from weatherapp.api.deps import SettingsDep, StateHolderDep
from weatherapp.schemas.weather import CitySearchRequest, LastCityResponse, UiStateResponse

router = APIRouter(prefix="/weather")


@router.get("/state", response_model=UiStateResponse)
async def get_state(holder: StateHolderDep, settings: SettingsDep) -> UiStateResponse:
    return UiStateResponse.from_state(holder.state.value, units=settings.units)


@router.post("/search", response_model=UiStateResponse)
async def search_by_city(
    body: CitySearchRequest,
    holder: StateHolderDep,
    settings: SettingsDep,
) -> UiStateResponse:
    holder.search_weather_by_city(body.city)
    await holder.wait_idle()
    return UiStateResponse.from_state(holder.state.value, units=settings.units)


@router.post("/location", response_model=UiStateResponse)
async def fetch_by_location(holder: StateHolderDep, settings: SettingsDep) -> UiStateResponse:
    holder.fetch_weather_by_location()
    await holder.wait_idle()
    return UiStateResponse.from_state(holder.state.value, units=settings.units)


@router.post("/clear-error", response_model=UiStateResponse)
async def clear_error(holder: StateHolderDep, settings: SettingsDep) -> UiStateResponse:
    holder.clear_error()
    return UiStateResponse.from_state(holder.state.value, units=settings.units)


@router.get("/last-city", response_model=LastCityResponse)
async def last_city(holder: StateHolderDep) -> LastCityResponse:
    return LastCityResponse(city=holder.saved_city())
