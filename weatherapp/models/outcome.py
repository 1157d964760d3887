from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from weatherapp.models.weather import WeatherReading


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Succeeded:
    reading: WeatherReading


@dataclass(frozen=True)
class Failed:
    message: str


FetchOutcome = Union[Pending, Succeeded, Failed]
