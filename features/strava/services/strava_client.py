import asyncio
import logging
import aiohttp
from typing import Any, Optional

from features.strava.services.token_manager import TokenManager
from features.strava.exceptions.strava_exceptions import StravaRequestError
from core.config import settings

logger = logging.getLogger(__name__)

class StravaClient:
    """Pass-through client for Strava route data."""

    def __init__(
        self,
        token_manager: TokenManager,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.token_manager = token_manager
        self.api_url = (api_url or settings.strava_api_url).rstrip("/")
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

    async def _get(self, path: str) -> Any:
        access_token = await self.token_manager.get_valid_access_token()
        session = await self._init_session()
        url = f"{self.api_url}{path}"
        try:
            async with session.get(
                url,
                headers={"Authorization": f"Bearer {access_token}"}
            ) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching {url}: {e!r}")
            raise StravaRequestError(f"Strava request to {path} failed") from e

    async def list_routes(self) -> Any:
        """Routes of the authenticated athlete."""
        return await self._get("/athletes/@me/routes")

    async def get_route(self, route_id: str) -> Any:
        """Details of a single route."""
        return await self._get(f"/routes/{route_id}")
