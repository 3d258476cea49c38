"""
Image CDN - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.exceptions import register_exception_handlers
from api.routers import image, system
from config import get_settings
from core.constants import APIConstants
from core.storage import create_storage
from transform.engine import TransformEngine

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Suppress per-request client logs
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("watchfiles").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Image CDN server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")
    logger.info(f"URL signing: {'enabled' if settings.security.signing_enabled else 'disabled'}")

    # Origin and cache containers live in the same store
    storage = create_storage(settings)

    app.state.settings = settings
    app.state.origin_store = storage
    app.state.cache_store = storage
    app.state.engine = TransformEngine()

    logger.info("All resources initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down Image CDN server...")
    try:
        await storage.close()
    except Exception as e:
        logger.error(f"Error during cleanup: {e}")

    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Image CDN",
    description="On-demand image transformation proxy with content-addressed caching",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, prefix=APIConstants.IMAGE_ROUTE_PREFIX, tags=["Image"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image CDN",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "image": APIConstants.IMAGE_ROUTE_PREFIX,
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "origin_store": getattr(app.state, "origin_store", None) is not None,
            "cache_store": getattr(app.state, "cache_store", None) is not None,
            "engine": getattr(app.state, "engine", None) is not None,
        },
    }


if __name__ == "__main__":
    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping server")
