"""
IPTV Stremio Addon - FastAPI Backend

Serves iptv-org channels as Stremio catalogs, filtered by the countries
and genres chosen on the configuration page.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iptv_addon.config import get_settings
from iptv_addon.exceptions import UpstreamFetchError
from iptv_addon.routers import addon, configure
from iptv_addon.services.context import AddonContext

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    settings = app.state.context.settings
    base = settings.public_url or f"http://localhost:{settings.port}"
    logger.info(f"IPTV addon running on {base.rstrip('/')}/")
    logger.info(f"Manifest available at {base.rstrip('/')}/manifest.json")

    yield

    logger.info("Shutting down IPTV addon...")


def create_app(context: Optional[AddonContext] = None) -> FastAPI:
    """Create the FastAPI app; a context is built from settings when not given."""
    context = context or AddonContext.from_settings()
    settings = context.settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Live IPTV filtered by selected countries and genres",
        lifespan=lifespan
    )
    app.state.context = context

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(configure.router)
    app.include_router(addon.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    @app.exception_handler(UpstreamFetchError)
    async def upstream_exception_handler(request: Request, exc: UpstreamFetchError):
        """Upstream failures surface as generic server errors."""
        logger.error(f"Upstream failure while serving {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "iptv_addon.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
