"""
Core utilities and configuration for Job Fair Hub.

This package provides core functionality including logging configuration,
monitoring, caching, database setup, and attendee credential helpers.
"""

from jobfair_hub.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
