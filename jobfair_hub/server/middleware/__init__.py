"""
Middleware modules for the Job Fair Hub server.

This package contains the request logging, access control and rate limiting
middleware.
"""

from .access_control import AccessControlMiddleware
from .logfire_middleware import LogfireMiddleware
from .rate_limit import RateLimitMiddleware

__all__ = ["AccessControlMiddleware", "LogfireMiddleware", "RateLimitMiddleware"]
