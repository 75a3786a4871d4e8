"""FastAPI application serving dashboard data.

Provides REST API endpoints for:
- 24 hour clock-aligned hourly forecast
- Radar frame list with playback state
- Wind grid samples
- Health checks

Example:
    >>> from maplecast.api import create_app
    >>> app = create_app()
    >>> # Run with: uvicorn maplecast.api.app:app --reload
"""

import argparse
import logging
import sys
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from maplecast.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HourlyEntry,
    HourlyForecastResponse,
    RadarFrameInfo,
    RadarResponse,
    WindPoint,
    WindResponse,
)
from maplecast.config import MaplecastConfig
from maplecast.dashboard.orchestrator import RadarOrchestrator
from maplecast.errors import InsufficientDataError, MalformedResponseError, NetworkError
from maplecast.utils.geo import Coordinates
from maplecast.wind.display import compass_direction, wind_color

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Invalid coordinates"},
    502: {"model": ErrorResponse, "description": "Upstream provider failed"},
}


def _coordinates(lat: Optional[float], lon: Optional[float]) -> Optional[Coordinates]:
    if lat is None or lon is None:
        return None
    return Coordinates(lat=lat, lon=lon)


def create_app(
    config: Optional[MaplecastConfig] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Settings. Defaults to MaplecastConfig.from_env()
        http_client: Client for provider calls. When omitted one is created
            on startup and closed on shutdown.

    Returns:
        Configured FastAPI application
    """
    config = config or MaplecastConfig.from_env()

    app = FastAPI(
        title="Maplecast API",
        description="Hourly forecast, radar frames and wind grid for a weather dashboard",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.http = http_client
    owns_client = http_client is None

    @app.on_event("startup")
    async def startup_event():
        """Open the shared HTTP client."""
        if app.state.http is None:
            app.state.http = httpx.AsyncClient(timeout=config.request_timeout)
            logger.info("HTTP client opened")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the shared HTTP client if we opened it."""
        if owns_client and app.state.http is not None:
            await app.state.http.aclose()
            app.state.http = None

    def orchestrator() -> RadarOrchestrator:
        if app.state.http is None:
            raise HTTPException(status_code=503, detail="HTTP client not ready")
        return RadarOrchestrator(app.state.http, config)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with custom response."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=f"HTTP_{exc.status_code}",
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.get("/", tags=["info"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Maplecast API",
            "version": API_VERSION,
            "docs": "/docs",
        }

    @app.get("/health", response_model=HealthResponse, tags=["info"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=API_VERSION)

    @app.get(
        "/forecast/hourly",
        response_model=HourlyForecastResponse,
        responses=ERROR_RESPONSES,
        tags=["forecast"],
    )
    async def hourly_forecast(
        lat: Optional[float] = Query(default=None, ge=-90, le=90),
        lon: Optional[float] = Query(default=None, ge=-180, le=180),
    ):
        """24 hourly entries starting at the current clock hour."""
        view = orchestrator()
        try:
            view.set_center(_coordinates(lat, lon))
            hourly = await view.load_forecast()
        except InsufficientDataError as e:
            raise HTTPException(status_code=502, detail=f"No forecast data: {e}")
        except (NetworkError, MalformedResponseError) as e:
            raise HTTPException(status_code=502, detail=f"Forecast provider failed: {e}")
        finally:
            await view.close()

        return HourlyForecastResponse(
            lat=view.center.lat,
            lon=view.center.lon,
            hours=[HourlyEntry(**sample.to_dict()) for sample in hourly],
        )

    @app.get("/radar", response_model=RadarResponse, tags=["radar"])
    async def radar_frames(
        lat: Optional[float] = Query(default=None, ge=-90, le=90),
        lon: Optional[float] = Query(default=None, ge=-180, le=180),
    ):
        """Radar frames, oldest first, with the initial playback state."""
        view = orchestrator()
        try:
            await view.set_location(_coordinates(lat, lon))
            response = RadarResponse(
                frames=[RadarFrameInfo(**frame.to_dict()) for frame in view.view.frames],
                frame_index=view.animator.frame_index,
                is_playing=view.animator.is_playing,
                radar_error=view.view.radar_error,
            )
        finally:
            await view.close()
        return response

    @app.get("/wind", response_model=WindResponse, tags=["wind"])
    async def wind_field(
        lat: Optional[float] = Query(default=None, ge=-90, le=90),
        lon: Optional[float] = Query(default=None, ge=-180, le=180),
    ):
        """Wind samples for the 5x5 grid around the location."""
        view = orchestrator()
        try:
            view.set_center(_coordinates(lat, lon))
            await view.refresh_wind()
            samples = list(view.view.wind_samples)
        finally:
            await view.close()

        return WindResponse(
            samples=[
                WindPoint(
                    **sample.to_dict(),
                    compass=compass_direction(sample.direction_deg),
                    color=wind_color(sample.speed_kmh),
                )
                for sample in samples
            ],
            wind_unavailable=not samples,
        )

    return app


def main() -> int:
    """Serve the API with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Serve the maplecast API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


# Default app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    sys.exit(main())
