from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List, Any

class Settings(BaseSettings):
    """Application settings."""

    # Strava OAuth settings
    strava_client_id: str = ""
    strava_client_secret: str = ""
    strava_redirect_uri: str = ""
    strava_authorize_url: str = "https://www.strava.com/oauth/authorize"
    strava_token_url: str = "https://www.strava.com/oauth/token"
    strava_api_url: str = "https://www.strava.com/api/v3"
    strava_scope: str = "read,activity:read_all,profile:read_all"

    # Where the browser lands after a successful login
    frontend_url: str = "http://localhost:5173/"

    # Persisted OAuth credential
    token_file: str = "tokens.json"

    # Tomorrow.io forecast settings
    tomorrow_api_key: str = ""
    tomorrow_base_url: str = "https://api.tomorrow.io/v4/weather/forecast"
    forecast_timestep: str = "1h"
    forecast_request_delay: float = 0.1  # seconds between forecast requests

    request: Dict[str, Any] = {
        "timeout": 30,        # seconds
        "max_retries": 0,
        "retry_delay": 1000   # milliseconds
    }

    cors_origins: List[str] = ["*"]

    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
