from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from core.config import settings
from core.logging_config import setup_logging

# Feature routes
from features.wind.routes.wind_routes import router as wind_router
from features.strava.routes.auth_routes import router as auth_router
from features.strava.routes.route_routes import router as route_router

# Services and clients
from features.wind.services.tomorrow_client import TomorrowForecastClient
from features.wind.services.wind_forecast_service import WindForecastService
from features.strava.services.strava_oauth_client import StravaOAuthClient
from features.strava.services.token_manager import TokenManager
from features.strava.services.strava_client import StravaClient
from features.strava.utils.token_store import TokenStore

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        logger.info("🚀 Starting Route Wind API...")

        if not settings.tomorrow_api_key:
            logger.warning("⚠️ TOMORROW_API_KEY is not set, forecast requests will be rejected upstream")

        forecast_client = TomorrowForecastClient()
        oauth_client = StravaOAuthClient()
        token_manager = TokenManager(
            store=TokenStore(settings.token_file),
            oauth_client=oauth_client
        )
        if token_manager.credential:
            logger.info(f"🔑 Loaded Strava credential from {settings.token_file}")

        app.state.forecast_client = forecast_client
        app.state.oauth_client = oauth_client
        app.state.wind_forecast_service = WindForecastService(forecast_client=forecast_client)
        app.state.token_manager = token_manager
        app.state.strava_client = StravaClient(token_manager=token_manager)

        logger.info("✨ API startup complete - ready to serve requests")
        yield

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise
    finally:
        logger.info("🔄 Shutting down API...")
        for name in ("forecast_client", "oauth_client", "strava_client"):
            client = getattr(app.state, name, None)
            if client:
                await client.close()
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="Route Wind API",
    description="Wind exposure along Strava routes",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include feature routers
app.include_router(wind_router)
app.include_router(auth_router)
app.include_router(route_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "time": datetime.now(timezone.utc).isoformat()
    }

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", settings.host)
    port = int(os.getenv("PORT", settings.port))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
