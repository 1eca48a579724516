"""Main entry point for the Plume application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from plume.api.v1 import (
    admin_router,
    categories_router,
    comments_router,
    newsletter_router,
    posts_router,
    reactions_router,
)
from plume.core.errors import PlumeError
from plume.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Plume API",
    description="Blog publishing API with threaded comments and reactions",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(reactions_router, prefix="/api/v1")
app.include_router(newsletter_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.exception_handler(PlumeError)
async def plume_error_handler(request: Request, exc: PlumeError) -> JSONResponse:
    """Render domain failures as JSON with their mapped status code."""
    logger.debug(
        "%s %s rejected with %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Blog publishing API with threaded comments and reactions",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("plume.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
