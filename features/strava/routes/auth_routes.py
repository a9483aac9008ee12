from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from features.strava.services.token_manager import TokenManager
from features.strava.exceptions.strava_exceptions import StravaAuthError
from core.config import settings
import logging

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/auth",
    tags=["Auth"]
)

def get_token_manager(request: Request) -> TokenManager:
    """Dependency to get the TokenManager instance."""
    return request.app.state.token_manager

@router.get(
    "/strava",
    summary="Start Strava login",
    description="Redirects to the Strava consent page"
)
async def start_strava_auth(
    token_manager: TokenManager = Depends(get_token_manager)
):
    """Redirect the browser to Strava."""
    return RedirectResponse(token_manager.authorization_url())

@router.get(
    "/callback",
    summary="Strava OAuth callback",
    description="Exchanges the authorization code, stores the credential and redirects to the frontend"
)
async def strava_callback(
    code: str = "",
    token_manager: TokenManager = Depends(get_token_manager)
):
    """Finish the Strava login."""
    try:
        credential = await token_manager.exchange_code(code)
    except StravaAuthError:
        return PlainTextResponse("Strava authentication failed.", status_code=500)

    query = urlencode({"access_token": credential.access_token})
    return RedirectResponse(f"{settings.frontend_url}?{query}")
