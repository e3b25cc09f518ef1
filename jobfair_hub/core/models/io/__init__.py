"""
I/O models for API requests and responses.

These Pydantic schemas define the contract between the HTTP endpoints and
clients, separate from the database entities.

Modules:
- common: ActionResult envelope for mutating operations
- registration: Job seeker registration and profile models
- verification: Check-in requests and results
- employers: Employer profile, booth, slot and shortlist models
- security: Security profile and incident models
- events: Event management models
- admin: Back-office models
"""

from .common import ActionResult

__all__ = ["ActionResult"]
