from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from features.strava.services.strava_client import StravaClient
from features.strava.exceptions.strava_exceptions import StravaError
import logging

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Routes"]
)

def get_strava_client(request: Request) -> StravaClient:
    """Dependency to get the StravaClient instance."""
    return request.app.state.strava_client

@router.get(
    "/routes",
    summary="List athlete routes",
    description="Returns the authenticated athlete's Strava routes as provided by Strava"
)
async def list_routes(
    client: StravaClient = Depends(get_strava_client)
):
    """List the athlete's routes."""
    try:
        return await client.list_routes()
    except StravaError as e:
        logger.error(f"Failed to list routes: {str(e)}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch routes."})

@router.get(
    "/route/{route_id}",
    summary="Get route details",
    description="Returns a single Strava route as provided by Strava"
)
async def get_route(
    route_id: str,
    client: StravaClient = Depends(get_strava_client)
):
    """Get details of one route."""
    try:
        return await client.get_route(route_id)
    except StravaError as e:
        logger.error(f"Failed to fetch route {route_id}: {str(e)}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch route details."})
