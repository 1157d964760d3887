from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PREFERENCES_PATH = Path.home() / ".weatherapp" / "weather_preferences.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WEATHER_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    api_key: str = Field(min_length=1)
    api_base_url: AnyHttpUrl = Field(default="https://api.openweathermap.org")
    units: Literal["metric", "imperial", "standard"] = Field(default="imperial")
    timeout_seconds: float = Field(default=30.0, ge=1.0, le=120.0)
    user_agent: str = Field(default="weatherapp/0.1", min_length=3, max_length=256)

    preferences_path: Path = Field(default=DEFAULT_PREFERENCES_PATH)

    location_provider: Literal["none", "static", "ip"] = Field(default="none")
    location_permission_granted: bool = Field(default=False)
    location_latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    location_longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    ip_location_url: AnyHttpUrl = Field(default="https://ipapi.co/json/")

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    settings = Settings()
    if not settings.cors_origins:
        settings.cors_origins = ["http://localhost:3000", "http://localhost:8000"]
    return settings
