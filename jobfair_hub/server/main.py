"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(request logging, access control, rate limiting, CORS) and exception
handlers, and includes all API routers. It serves as the root of the web
server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobfair_hub.core.database import dispose_engine
from jobfair_hub.core.logging_config import get_logger, setup_logging
from jobfair_hub.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    admin_booths,
    admin_events,
    booth_assignments,
    employer,
    health,
    registration,
    security,
)
from .core import constant
from .core.config import settings
from .core.env_validation import log_environment_status
from .exception_handlers import setup_exception_handlers
from .middleware import AccessControlMiddleware, LogfireMiddleware, RateLimitMiddleware
from .services.cache import close_cache_manager

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Reports missing configuration on startup, and releases the cache
    connection and the database engine on shutdown.
    """
    # Startup
    logger.info("Starting up Job Fair Hub Server...")
    log_environment_status()

    yield

    # Shutdown
    logger.info("Shutting down Job Fair Hub Server...")
    await close_cache_manager()
    await dispose_engine()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Job Fair Hub Server API

    This API provides the backend services for running a job fair: job seeker
    registration, employer booths and interview slots, candidate shortlists,
    security check-in by PIN, ticket or QR code, and the admin back-office.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)
setup_exception_handlers(app)

# Added innermost first; requests pass the logging middleware first and CORS last.
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(AccessControlMiddleware)
app.add_middleware(LogfireMiddleware)


app.include_router(health.router, tags=["health"])
app.include_router(registration.router, prefix=f"{constant.API_V1_STR}/registration", tags=["registration"])
app.include_router(security.router, prefix=f"{constant.API_V1_STR}/security", tags=["security"])
app.include_router(employer.router, prefix=f"{constant.API_V1_STR}/employer", tags=["employer"])
app.include_router(admin_events.router, prefix=f"{constant.API_V1_STR}/admin/events", tags=["admin", "events"])
app.include_router(admin_booths.router, prefix=f"{constant.API_V1_STR}/admin/booths", tags=["admin", "booths"])
app.include_router(
    booth_assignments.router,
    prefix=f"{constant.API_V1_STR}/admin/booth-assignments",
    tags=["admin", "booth-assignments"],
)
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
