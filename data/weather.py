"""OpenWeatherMap wind retrieval.

Wind comes from two endpoints: the current conditions (one sample stamped
with the request time) and the 5-day / 3-hour forecast. Speeds are requested
in metric units (m/s); directions are passed through as reported.
"""

import logging
from datetime import datetime, timezone

import httpx

from config import (
    OPENWEATHER_BASE_URL, ENTRIES_PER_DAY, HTTP_TIMEOUT_S, N_DAYS,
)
from model.entities import WindSample

logger = logging.getLogger(__name__)


class WeatherError(Exception):
    """Wind could not be retrieved or parsed."""


def validate_api_key(api_key) -> bool:
    return isinstance(api_key, str) and len(api_key.strip()) > 0


class OpenWeatherClient:

    def __init__(self, api_key: str, base_url: str = OPENWEATHER_BASE_URL,
                 client: httpx.Client | None = None):
        if not validate_api_key(api_key):
            raise WeatherError("An OpenWeatherMap API key is required")
        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=HTTP_TIMEOUT_S)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, endpoint: str, lat: float, lon: float) -> dict:
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        try:
            resp = self.client.get(f"{self.base_url}/{endpoint}", params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise WeatherError(
                f"Weather API error on /{endpoint}: {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise WeatherError(f"Weather API request to /{endpoint} failed: {e}") from e

    def current_wind(self, lat: float, lon: float, now: datetime | None = None) -> WindSample:
        data = self._get("weather", lat, lon)
        now = now or datetime.now(tz=timezone.utc)
        try:
            wind = data["wind"]
            return WindSample(speed=float(wind["speed"]),
                              direction=float(wind.get("deg", 0.0)), at=now)
        except (KeyError, TypeError) as e:
            raise WeatherError(f"Malformed current weather payload: {e}") from e

    def forecast_wind(self, lat: float, lon: float, days: int = N_DAYS) -> list[WindSample]:
        data = self._get("forecast", lat, lon)
        try:
            entries = data["list"][: days * ENTRIES_PER_DAY]
            return [
                WindSample.from_epoch_ms(e["wind"]["speed"], e["wind"].get("deg", 0.0),
                                         int(e["dt"]) * 1000)
                for e in entries
            ]
        except (KeyError, TypeError) as e:
            raise WeatherError(f"Malformed forecast payload: {e}") from e

    def wind_for_days(self, lat: float, lon: float, days: int = N_DAYS,
                      now: datetime | None = None) -> list[WindSample]:
        """Current wind followed by up to ``days * 8`` forecast samples."""
        samples = [self.current_wind(lat, lon, now=now)]
        samples.extend(self.forecast_wind(lat, lon, days))
        logger.info("Fetched %d wind samples for (%.4f, %.4f)", len(samples), lat, lon)
        return samples
