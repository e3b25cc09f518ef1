"""Job Fair Hub.

Backend service for running a job fair: attendee registration, employer
booths and interview slots, security check-in by PIN or ticket number, and an
admin back-office.

High-level architecture
-----------------------

- ``jobfair_hub.core``:

  - Logging and Logfire monitoring setup.
  - Attendee credential helpers (PINs, ticket numbers, QR payloads).
  - The cache manager and fixed-window rate limiter over a Redis-compatible
    client.
  - SQLModel entities and async repositories.

- ``jobfair_hub.server``:

  - FastAPI application, middleware and exception handlers.
  - Service layer implementing the check-in workflow and back-office
    operations.
  - Versioned HTTP routers.

Typical check-in
----------------

1. Security staff submit a PIN or ticket number.
2. ``VerificationService`` resolves the attendee, auto-approves the
   registration and writes an attendance record, even for duplicates.
3. The response tells staff whether the attendee had already checked in.
"""
