"""
Domain errors raised by the service layer.

Every error carries the message shown to the user and the HTTP status the
exception handler responds with.
"""

from __future__ import annotations

from fastapi import status


class JobFairError(Exception):
    """Base class for expected failures of a service operation."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(JobFairError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(JobFairError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class PermissionDeniedError(JobFairError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(JobFairError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(JobFairError):
    status_code = status.HTTP_409_CONFLICT
