from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coordinates(_Frozen):
    longitude: float = Field(alias="lon")
    latitude: float = Field(alias="lat")


class Condition(_Frozen):
    id: int
    main: str
    description: str
    icon: str


class MainMeasurements(_Frozen):
    temperature: float = Field(alias="temp")
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int | None = None
    ground_level: int | None = Field(default=None, alias="grnd_level")


class Wind(_Frozen):
    speed: float = 0.0
    degrees: int = Field(default=0, alias="deg")
    gust: float | None = None


class Clouds(_Frozen):
    cloudiness: int = Field(default=0, alias="all")


class Sys(_Frozen):
    type: int | None = None
    id: int | None = None
    country: str = ""
    sunrise: int = 0
    sunset: int = 0


class WeatherReading(_Frozen):
    """Current conditions for one location, as returned by /data/2.5/weather."""

    coordinates: Coordinates = Field(alias="coord")
    conditions: list[Condition] = Field(default_factory=list, alias="weather")
    base: str = ""
    main: MainMeasurements
    visibility: int = 0
    wind: Wind = Field(default_factory=Wind)
    clouds: Clouds = Field(default_factory=Clouds)
    timestamp: int = Field(alias="dt")
    sys: Sys = Field(default_factory=Sys)
    timezone: int = 0
    location_id: int = Field(default=0, alias="id")
    location_name: str = Field(default="", alias="name")
    code: int = Field(default=200, alias="cod")

    @property
    def primary_condition(self) -> Condition | None:
        # An empty condition list is a valid reading.
        return self.conditions[0] if self.conditions else None

    @property
    def country(self) -> str:
        return self.sys.country
