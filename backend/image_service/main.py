"""
FastAPI application entry point.
Sets up the API with logging, metrics and CORS.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from image_service import __version__
from image_service.config import get_settings
from image_service.api.router import api_router
from image_service.middleware.cors import setup_cors
from image_service.middleware.metrics_middleware import MetricsMiddleware
from image_service.utils.logging import configure_logging

SERVICE_NAME = "image-service"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure logging, load settings (fails fast if GitHub config is missing)
    """
    settings = get_settings()
    configure_logging(SERVICE_NAME, settings.log_level)
    yield


app = FastAPI(
    title="Image Service",
    description="Stores product images on GitHub and serves them via jsDelivr",
    version=__version__,
    lifespan=lifespan
)

# Metrics first so CORS ends up outermost
app.add_middleware(MetricsMiddleware)
setup_cors(app)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Image Service",
        "version": __version__,
        "environment": get_settings().environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
