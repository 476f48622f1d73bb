import logging
from collections.abc import Mapping

import httpx

from src.config.settings import Settings, is_configured, settings
from src.modules.news.fetcher import fetch_with_retry
from src.modules.weather.schemas import WeatherResponse

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherNotConfiguredError(Exception):
    pass


class WeatherUnavailableError(Exception):
    pass


class WeatherService:
    """Current conditions for one city from OpenWeatherMap, in metric units."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = config or settings
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return is_configured(self._settings.openweather_api_key)

    @staticmethod
    def _parse(data: Mapping) -> WeatherResponse:
        main = data["main"]
        weather = data["weather"][0]
        return WeatherResponse(
            city=data["name"],
            temp=round(main["temp"]),
            feels_like=round(main["feels_like"]),
            condition=weather["main"],
            description=weather["description"],
            humidity=main["humidity"],
            wind=data["wind"]["speed"],
            icon=weather["icon"],
        )

    async def get_weather(self, city: str) -> WeatherResponse:
        if not self.enabled:
            raise WeatherNotConfiguredError("OPENWEATHER_API_KEY is not set")

        url = str(httpx.URL(OPENWEATHER_URL, params={
            "q": city,
            "units": "metric",
            "appid": self._settings.openweather_api_key.strip(),
        }))
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await fetch_with_retry(
                    client,
                    url,
                    max_retries=0,
                    timeout=self._settings.request_timeout_seconds,
                )
            return self._parse(response.json())
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Weather fetch failed for '%s': %s", city, type(exc).__name__)
            raise WeatherUnavailableError(city) from exc


weather_service = WeatherService()
