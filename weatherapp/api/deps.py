from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from weatherapp.core.config import Settings
from weatherapp.services.weather import WeatherStateHolder


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_state_holder(request: Request) -> WeatherStateHolder:
    return request.app.state.state_holder


SettingsDep = Annotated[Settings, Depends(get_settings)]
StateHolderDep = Annotated[WeatherStateHolder, Depends(get_state_holder)]
