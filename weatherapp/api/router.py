from fastapi import APIRouter

from weatherapp.api.routes import weather

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(weather.router, tags=["weather"])
