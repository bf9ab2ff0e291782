"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from .core.config import settings
from .core.database import close_db, engine, init_db
from .core.dependencies import DatabaseSession
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
)
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_NAME,
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_metrics,
    setup_structured_logging,
    setup_tracing,
)
from .core.rate_limiter import RateLimiter
from .routers import (
    admin_messages,
    admin_tours,
    admin_trip_requests,
    contact,
    dashboard,
    health,
    metrics,
    sitemap,
    tour,
    trip_request,
)
from .schemas.health import HealthStatus, ReadinessResponse

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    logger.info("Starting FastAPI application")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    try:
        setup_tracing()
        setup_metrics()
        instrument_sqlalchemy(engine)
        logger.info("Observability setup completed")

        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down FastAPI application")

    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error during application cleanup: {e}")

    logger.info("Application shutdown complete")


def create_app(rate_limiter: Optional[RateLimiter] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        rate_limiter: Limiter to install; built from settings when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Timola Tours API",
        description="Tour catalog, booking inquiries and contact messages for a Morocco tour operator, with an admin back office",
        version=SERVICE_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.rate_limiter = rate_limiter or RateLimiter.from_settings(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After", "traceparent", "tracestate"],
    )

    # Setup custom middleware
    setup_middleware(app, enable_logging=True)

    # Instrument FastAPI with OpenTelemetry
    instrument_fastapi(app)

    # Register exception handlers
    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get(
        "/health",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Health Check",
        description="Check if the service is healthy and responsive",
        response_model=dict,
    )
    async def health_check():
        """Liveness: the process is up and serving."""
        return {
            "status": HealthStatus.HEALTHY.value,
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": settings.environment,
            "debug": settings.debug,
        }

    @app.get(
        "/ready",
        tags=["Health"],
        summary="Readiness Check",
        description="Check that the database answers queries",
        response_model=ReadinessResponse,
    )
    async def readiness_check(db: AsyncSession = DatabaseSession):
        """
        Readiness check that runs a trivial query.

        Returns 503 with status ``degraded`` when the database is unreachable.
        """
        try:
            await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Readiness check failed", extra={"error": str(e)})
            response_data = ReadinessResponse(
                status=HealthStatus.DEGRADED,
                service=SERVICE_NAME,
                checks={"database": "unavailable"},
            )
            return JSONResponse(status_code=503, content=response_data.model_dump(mode="json"))

        response_data = ReadinessResponse(
            status=HealthStatus.READY,
            service=SERVICE_NAME,
            checks={"database": "ok"},
        )
        return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))

    @app.get(
        "/info",
        status_code=status.HTTP_200_OK,
        tags=["Info"],
        summary="Service Information",
        description="Get detailed information about the service",
        response_model=dict,
    )
    async def service_info():
        """
        Service information endpoint.

        Returns:
            dict: Detailed service information
        """
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "description": "Tour catalog and booking inquiry backend",
            "environment": settings.environment,
            "debug": settings.debug,
            "features": {
                "admin_sessions": True,
                "rate_limiting": True,
                "tracing": True,
                "problem_details": True,
            },
            "rate_limiter": app.state.rate_limiter.get_stats(),
            "endpoints": {
                "health": "/health",
                "readiness": "/ready",
                "info": "/info",
                "metrics": "/metrics",
                "sitemap": "/sitemap.xml",
                "docs": "/docs" if settings.debug else None,
                "redoc": "/redoc" if settings.debug else None,
            },
        }

    # Register API routers
    app.include_router(health.router)
    app.include_router(tour.router)
    app.include_router(trip_request.router)
    app.include_router(contact.router)
    app.include_router(admin_tours.router)
    app.include_router(admin_trip_requests.router)
    app.include_router(admin_messages.router)
    app.include_router(dashboard.router)
    app.include_router(sitemap.router)
    app.include_router(metrics.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "timola_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
