from typing import List
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from features.wind.models.wind_types import ForecastRequest, ForecastPoint, ErrorResponse
from features.wind.services.wind_forecast_service import WindForecastService
from features.wind.exceptions.forecast_exceptions import ForecastFetchFailed
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Wind"],
    responses={
        500: {"model": ErrorResponse, "description": "Forecast provider failed"}
    }
)

def get_wind_forecast_service(request: Request) -> WindForecastService:
    """Get WindForecastService instance from app state."""
    return request.app.state.wind_forecast_service

@router.post(
    "/forecast",
    response_model=List[ForecastPoint],
    summary="Get wind forecast along a route",
    description="Returns wind speed, direction, travel bearing and wind impact for each route coordinate at the requested time"
)
async def get_route_wind_forecast(
    body: ForecastRequest,
    service: WindForecastService = Depends(get_wind_forecast_service)
):
    """Get wind forecast for an ordered list of route coordinates."""
    try:
        return await service.build_forecast_series(body.coordinates, body.target_time)
    except ForecastFetchFailed as e:
        logger.error(f"Wind forecast failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch wind forecast."}
        )
