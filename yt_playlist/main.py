from pathlib import Path

from fastapi import FastAPI

from yt_playlist.config import settings
from yt_playlist.logger import app_logger, configure_logging
from yt_playlist.routers import auth, playlists

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production else None,
    openapi_url=f"{settings.api_prefix}/openapi.json",
)

# Include routers
app.include_router(auth.router, prefix=settings.api_prefix, tags=["Authentication"])
app.include_router(playlists.router, prefix=settings.api_prefix, tags=["Playlists"])


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    configure_logging(settings)
    app_logger.info(f"Starting {settings.app_name}")
    app_logger.info(f"Environment: {settings.environment}")
    app_logger.info(f"Debug mode: {settings.debug}")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    app_logger.info("Shutting down application")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
    }


@app.get("/health")
async def health_check():
    """Detailed health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
        "environment": settings.environment,
        "config_file": settings.config_path,
        "token_saved": Path(settings.token_path).exists(),
    }
