import logging
import aiohttp
from typing import Any, Dict, Optional

from features.strava.models.strava_types import Credential
from core.config import settings

logger = logging.getLogger(__name__)

class StravaOAuthClient:
    """Calls the Strava OAuth token endpoint."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.client_id = client_id if client_id is not None else settings.strava_client_id
        self.client_secret = client_secret if client_secret is not None else settings.strava_client_secret
        self.token_url = token_url or settings.strava_token_url
        self.timeout = timeout if timeout is not None else settings.request["timeout"]
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

    async def _post_grant(self, payload: Dict[str, Any]) -> Credential:
        session = await self._init_session()
        body = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **payload
        }
        async with session.post(self.token_url, json=body) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)
            return Credential.model_validate(data)

    async def exchange_code(self, code: str) -> Credential:
        """Trade an authorization code for a credential."""
        return await self._post_grant({
            "code": code,
            "grant_type": "authorization_code"
        })

    async def refresh(self, refresh_token: str) -> Credential:
        """Get a fresh credential with the refresh-token grant."""
        return await self._post_grant({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token
        })
