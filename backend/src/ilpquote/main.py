"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for ILP generation and validation
- ILP service startup (secret and currency table)
- Error handling and logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ilpquote import __version__
from ilpquote.api.routes import health, ilp
from ilpquote.config import get_settings
from ilpquote.domain.errors import IlpError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the ILP service at startup so a missing secret or a broken
    currency table stops the process before it serves requests.
    """
    settings = get_settings()

    logger.info(f"Starting ilpquote v{__version__}")
    logger.info(f"Strict ILP addresses: {settings.strict_ilp_addresses}")
    logger.info(f"Debug mode: {settings.debug}")

    service = app.dependency_overrides.get(ilp.get_ilp_service, ilp.get_ilp_service)()
    logger.info(f"ILP service ready with {len(service.amounts.currency_decimals)} currencies")

    yield  # Application runs here

    logger.info("Shutting down ilpquote")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    app = FastAPI(
        title="ILP Quote API",
        description=(
            "Interledger v1 fulfilment, condition and packet generation "
            "for Mojaloop quote responses."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(ilp.router, prefix="/api/v1")

    @app.exception_handler(IlpError)
    async def ilp_error_handler(request: Request, exc: IlpError):
        """Map deterministic ILP errors to 400 responses."""
        logger.warning(f"ILP request rejected ({exc.code}): {exc}")
        return JSONResponse(
            status_code=400,
            content={
                "error": type(exc).__name__,
                "detail": str(exc),
                "code": exc.code,
            },
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )

    return app


# Create the application instance
app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ilpquote.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
