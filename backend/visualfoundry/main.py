"""
VisualFoundry Motion Graphics API

Main FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager

import psutil
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visualfoundry.config import settings
from visualfoundry.middleware import ErrorHandlerMiddleware, SecurityHeadersMiddleware
from visualfoundry.models import HealthResponse
from visualfoundry.routes import motions, render
from visualfoundry.services import get_renderer, get_storage
from visualfoundry.services.cleanup_scheduler import start_cleanup_scheduler, stop_cleanup_scheduler

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    get_storage().ensure_directories()
    version = await get_renderer().probe()
    if version:
        logger.info(f"Encoder available: {version}")
    else:
        logger.warning(f"ffmpeg not usable at {settings.FFMPEG_BINARY}; renders will fail")
    start_cleanup_scheduler()
    yield
    # Shutdown
    stop_cleanup_scheduler()


app = FastAPI(
    title="VisualFoundry API",
    description="Turns a still image and short text into an MP4 motion graphic",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Security headers on every response, including error responses
app.add_middleware(SecurityHeadersMiddleware)

# Register routers
app.include_router(motions.router, prefix="/api", tags=["Metadata"])
app.include_router(render.router, prefix="/api", tags=["Render"])


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and process uptime in seconds.
    """
    uptime = time.time() - psutil.Process().create_time()
    return HealthResponse(status="ok", uptime=round(max(uptime, 0.0), 3))
