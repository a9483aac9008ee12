import time
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class Credential(BaseModel):
    """OAuth credential returned by the Strava token endpoint."""
    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str
    expires_at: int = Field(..., description="Expiry as epoch seconds")
    token_type: Optional[str] = "Bearer"

    def is_expired(self, now: Optional[float] = None) -> bool:
        """True once the expiry timestamp has passed."""
        now = time.time() if now is None else now
        return self.expires_at < now
