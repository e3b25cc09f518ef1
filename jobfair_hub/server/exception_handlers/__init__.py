"""
Exception handlers for the Job Fair Hub server.

This package contains the handlers for domain errors and for anything left
unhandled, and a setup function to register them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
