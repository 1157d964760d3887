from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from weatherapp.api.router import api_router
from weatherapp.clients.location import create_location_provider
from weatherapp.clients.openweather import OpenWeatherClient
from weatherapp.core.config import Settings, load_settings
from weatherapp.core.logging import configure_logging
from weatherapp.repositories.preferences_file import JsonFileLastCityStore
from weatherapp.repositories.weather_remote import RemoteWeatherRepository
from weatherapp.services.weather import WeatherStateHolder

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.weather_client = OpenWeatherClient(
            base_url=str(settings.api_base_url),
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )
        app.state.location_provider = create_location_provider(settings)
        app.state.last_city_store = JsonFileLastCityStore(settings.preferences_path)
        repository = RemoteWeatherRepository(
            client=app.state.weather_client,
            store=app.state.last_city_store,
            api_key=settings.api_key,
            units=settings.units,
        )
        app.state.state_holder = WeatherStateHolder(
            repository=repository,
            location_provider=app.state.location_provider,
        )
        logger.info(
            "Starting weather app (units=%s, location=%s)",
            settings.units,
            settings.location_provider,
        )
        app.state.state_holder.initialize()

        yield
        await app.state.state_holder.close()
        await app.state.location_provider.close()
        await app.state.weather_client.close()

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Weather App API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cross-Origin-Resource-Policy", "same-site")
        return response

    @app.get("/", tags=["meta"])
    def root():
        return {"name": "weatherapp", "status": "ok"}

    app.include_router(api_router)
    return app
