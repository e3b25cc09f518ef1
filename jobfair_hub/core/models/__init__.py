"""Pydantic models shared across the service."""
