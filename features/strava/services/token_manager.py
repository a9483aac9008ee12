import asyncio
import logging
from typing import Optional
from urllib.parse import urlencode

from pydantic import ValidationError
import aiohttp

from features.strava.models.strava_types import Credential
from features.strava.services.strava_oauth_client import StravaOAuthClient
from features.strava.utils.token_store import TokenStore
from features.strava.exceptions.strava_exceptions import (
    StravaAuthError,
    TokenRefreshError,
    NotAuthenticatedError
)
from core.config import settings

logger = logging.getLogger(__name__)

class TokenManager:
    """Owns the Strava credential: acquisition, persistence and silent refresh.

    One instance lives on the application state and is handed to whatever
    needs a bearer token.
    """

    def __init__(self, store: TokenStore, oauth_client: StravaOAuthClient):
        self.store = store
        self.oauth_client = oauth_client
        self._credential: Optional[Credential] = store.load()
        self._lock = asyncio.Lock()

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def authorization_url(self) -> str:
        """URL of the Strava consent page."""
        params = {
            "client_id": settings.strava_client_id,
            "response_type": "code",
            "redirect_uri": settings.strava_redirect_uri,
            "approval_prompt": "force",
            "scope": settings.strava_scope
        }
        return f"{settings.strava_authorize_url}?{urlencode(params, safe=',:/')}"

    def _install(self, credential: Credential) -> Credential:
        # Persist first so memory never holds a credential the file lacks
        self.store.save(credential)
        self._credential = credential
        return credential

    async def exchange_code(self, code: str) -> Credential:
        """Exchange an authorization code and persist the resulting credential."""
        try:
            credential = await self.oauth_client.exchange_code(code)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError, ValueError) as e:
            logger.error(f"Strava code exchange failed: {e!r}")
            raise StravaAuthError("Strava authentication failed") from e

        try:
            self._install(credential)
        except OSError as e:
            logger.error(f"Could not store Strava credential in {self.store.path}: {e!r}")
            raise StravaAuthError("Strava credential could not be stored") from e

        logger.info("Stored new Strava credential from authorization code")
        return credential

    async def get_valid_access_token(self) -> str:
        """Access token that is valid now, refreshing it first if expired."""
        async with self._lock:
            credential = self._credential
            if credential is None:
                raise NotAuthenticatedError("No Strava credential stored, authorize first")

            if credential.is_expired():
                logger.info("Strava access token expired, refreshing")
                try:
                    refreshed = await self.oauth_client.refresh(credential.refresh_token)
                except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError, ValueError) as e:
                    logger.error(f"Strava token refresh failed: {e!r}")
                    raise TokenRefreshError("Strava token refresh failed") from e

                try:
                    credential = self._install(refreshed)
                except OSError as e:
                    logger.error(f"Could not store refreshed Strava credential in {self.store.path}: {e!r}")
                    raise TokenRefreshError("Refreshed Strava credential could not be stored") from e

            return credential.access_token
