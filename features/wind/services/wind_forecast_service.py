import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from features.wind.models.wind_types import ForecastPoint, HourlySample, as_utc
from features.wind.services.tomorrow_client import TomorrowForecastClient
from features.wind.exceptions.forecast_exceptions import ForecastFetchFailed
from features.wind.utils.impact import calculate_wind_impact
from features.common.utils.geo import calculate_bearing
from features.common.services.rate_limiter import RequestThrottle
from core.config import settings

logger = logging.getLogger(__name__)

class WindForecastService:
    """Builds per-coordinate wind forecasts and impacts along a route."""

    def __init__(
        self,
        forecast_client: TomorrowForecastClient,
        request_delay: Optional[float] = None
    ):
        self.forecast_client = forecast_client
        self.request_delay = request_delay if request_delay is not None else settings.forecast_request_delay

    @staticmethod
    def select_sample(samples: List[HourlySample], target_time: datetime) -> Optional[HourlySample]:
        """First sample at or after target_time. Samples are expected in provider order."""
        return next((s for s in samples if s.time >= target_time), None)

    async def build_forecast_series(
        self,
        coordinates: Sequence[Tuple[float, float]],
        target_time: datetime
    ) -> List[ForecastPoint]:
        """Fetch the forecast for every coordinate in order and score the wind.

        Coordinates without a sample at or after target_time are left out of
        the result. Requests are issued one at a time, spaced by the request
        delay.

        Raises:
            ForecastFetchFailed: If any forecast request fails. No partial
                result is returned.
        """
        target_time = as_utc(target_time)
        throttle = RequestThrottle(self.request_delay)
        forecasts: List[ForecastPoint] = []
        last_index = len(coordinates) - 1

        logger.info(f"Building wind forecast for {len(coordinates)} points at {target_time.isoformat()}")

        for i, (lat, lon) in enumerate(coordinates):
            await throttle.limit()
            try:
                samples = await self.forecast_client.get_hourly_forecast(lat, lon)
            except ForecastFetchFailed:
                raise
            except Exception as e:
                logger.error(f"Forecast lookup failed for point {i} ({lat},{lon}): {str(e)}")
                raise ForecastFetchFailed(f"Forecast lookup failed for point {i}") from e

            sample = self.select_sample(samples, target_time)
            if sample is None:
                logger.debug(f"No forecast sample at or after {target_time.isoformat()} for point {i}, skipping")
                continue

            wind_speed = sample.values.wind_speed or 0
            wind_direction = sample.values.wind_direction or 0

            if i < last_index:
                next_lat, next_lon = coordinates[i + 1]
                bearing = calculate_bearing(lat, lon, next_lat, next_lon)
            else:
                bearing = 0

            forecasts.append(ForecastPoint(
                lat=lat,
                lon=lon,
                wind_speed=wind_speed,
                wind_direction=wind_direction,
                bearing=bearing,
                impact=calculate_wind_impact(bearing, wind_direction, wind_speed)
            ))

        logger.info(f"Built {len(forecasts)} of {len(coordinates)} forecast points")
        return forecasts
