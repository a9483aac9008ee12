import asyncio
import logging
import aiohttp
from typing import Any, Dict, List, Optional
from pydantic import ValidationError

from features.wind.models.wind_types import HourlySample
from features.wind.exceptions.forecast_exceptions import ForecastFetchFailed
from core.config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}

class TomorrowForecastClient:
    """Client for the Tomorrow.io hourly weather forecast API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timestep: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[int] = None
    ):
        self.api_key = api_key if api_key is not None else settings.tomorrow_api_key
        self.base_url = base_url or settings.tomorrow_base_url
        self.timestep = timestep or settings.forecast_timestep
        self.timeout = timeout if timeout is not None else settings.request["timeout"]
        self.max_retries = max_retries if max_retries is not None else settings.request["max_retries"]
        self.retry_delay = retry_delay if retry_delay is not None else settings.request["retry_delay"]
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    @staticmethod
    def _is_retryable(error: Exception) -> bool:
        if isinstance(error, aiohttp.ClientResponseError):
            return error.status in RETRYABLE_STATUS
        return isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError))

    @staticmethod
    def parse_hourly(payload: Dict[str, Any]) -> List[HourlySample]:
        """Extract the hourly timeline from a forecast payload."""
        try:
            hourly = payload["timelines"]["hourly"]
        except (KeyError, TypeError):
            raise ForecastFetchFailed("Forecast payload has no hourly timeline")

        if not isinstance(hourly, list):
            raise ForecastFetchFailed("Forecast hourly timeline is not a list")

        samples = []
        for index, entry in enumerate(hourly):
            try:
                samples.append(HourlySample.model_validate(entry))
            except ValidationError as e:
                # An entry without a usable time can never match, drop it alone
                logger.warning(f"Skipping malformed hourly sample {index}: {e.error_count()} error(s)")
        return samples

    async def _fetch(self, lat: float, lon: float) -> Dict[str, Any]:
        session = await self._init_session()
        params = {
            "location": f"{lat},{lon}",
            "timesteps": self.timestep,
            "apikey": self.api_key
        }
        async with session.get(self.base_url, params=params) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    async def get_hourly_forecast(self, lat: float, lon: float) -> List[HourlySample]:
        """Get the hourly forecast series for a coordinate.

        Raises:
            ForecastFetchFailed: If the request fails after all retries or the
                payload cannot be read.
        """
        attempt = 0
        while True:
            try:
                payload = await self._fetch(lat, lon)
                return self.parse_hourly(payload)
            except ForecastFetchFailed as e:
                logger.error(f"Unusable forecast for {lat},{lon}: {str(e)}")
                raise
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                if attempt < self.max_retries and self._is_retryable(e):
                    attempt += 1
                    logger.warning(
                        f"Forecast request for {lat},{lon} failed ({e!r}), "
                        f"retry {attempt}/{self.max_retries} in {self.retry_delay}ms"
                    )
                    await asyncio.sleep(self.retry_delay / 1000)
                    continue

                logger.error(f"Error fetching forecast for {lat},{lon}: {e!r}")
                raise ForecastFetchFailed(f"Forecast request for {lat},{lon} failed") from e
