"""
Exception Handlers for the FastAPI Application.

Domain errors raised by the service layer become ``{"success": false,
"message": ...}`` responses with the error's status code. Anything else is
logged with an error id, the request context and the full traceback, and
answered with a generic 500 carrying that id.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from jobfair_hub.core.logging_config import get_logger
from jobfair_hub.core.monitoring import log_error
from jobfair_hub.server.services.errors import JobFairError

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: JobFairError) -> JSONResponse:
    """Answer an expected service failure with its message and status."""
    logger.info(
        f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(JobFairError, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
