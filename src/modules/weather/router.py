from fastapi import APIRouter, HTTPException, Query

from src.modules.weather.schemas import WeatherResponse
from src.modules.weather.service import (
    WeatherNotConfiguredError,
    WeatherUnavailableError,
    weather_service,
)

router = APIRouter()


@router.get("", response_model=WeatherResponse)
async def get_weather(city: str = Query("", max_length=100)) -> WeatherResponse:
    city = city.strip()
    if not city:
        raise HTTPException(status_code=400, detail="City is required")
    try:
        return await weather_service.get_weather(city)
    except WeatherNotConfiguredError:
        raise HTTPException(status_code=503, detail="Weather service not configured")
    except WeatherUnavailableError:
        raise HTTPException(status_code=502, detail="Weather fetch failed")
