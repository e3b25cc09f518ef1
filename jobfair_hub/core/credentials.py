"""
Attendee credential helpers.

Job seekers check in with a 6-digit PIN or a ticket number of the form
``HCS-YYYY-XXXXXXXX``. The attendee app can also render both as a QR payload,
which is a small JSON document stamped with the event code and the time it
was generated.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import re
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

TICKET_PREFIX = "HCS"
EVENT_CODE = "HCS2025"
QR_CODE_MAX_AGE_MS = 24 * 60 * 60 * 1000

_PIN_PATTERN = re.compile(r"[0-9]{6}")
_TICKET_PATTERN = re.compile(rf"{TICKET_PREFIX}-[0-9]{{4}}-[0-9]{{8}}")


def generate_secure_pin() -> str:
    """Return a random PIN in the range 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


def generate_ticket_number(year: Optional[int] = None) -> str:
    """Return a ticket number ``HCS-{year}-{8 digits}`` for the given or current year."""
    year = year or datetime.now().year
    return f"{TICKET_PREFIX}-{year}-{secrets.randbelow(100_000_000):08d}"


def validate_pin_format(pin: str) -> bool:
    return bool(pin) and _PIN_PATTERN.fullmatch(pin) is not None


def validate_ticket_number_format(ticket_number: str) -> bool:
    return bool(ticket_number) and _TICKET_PATTERN.fullmatch(ticket_number) is not None


def generate_session_token() -> str:
    """Return 32 random bytes, hex encoded."""
    return secrets.token_hex(32)


def hash_pin(pin: str, salt: Optional[str] = None) -> str:
    """Hash a PIN as ``{salt}:{sha256(pin + salt)}``.

    Args:
        pin: Plain PIN.
        salt: Salt to reuse; a fresh 32-character hex salt is drawn when omitted.

    Returns:
        The salted hash in ``salt:hexdigest`` form.
    """
    actual_salt = salt or secrets.token_hex(16)
    digest = hashlib.sha256(f"{pin}{actual_salt}".encode("utf-8")).hexdigest()
    return f"{actual_salt}:{digest}"


def verify_hashed_pin(pin: str, hashed_pin: str) -> bool:
    """Check a plain PIN against a value produced by :func:`hash_pin`."""
    salt, sep, expected = hashed_pin.partition(":")
    if not sep or not salt or not expected:
        return False
    _, _, actual = hash_pin(pin, salt).partition(":")
    return hmac.compare_digest(actual, expected)


def generate_qr_code_data(ticket_number: str, pin: str, event_code: str = EVENT_CODE) -> str:
    """Serialize the check-in QR payload for an attendee."""
    return json.dumps(
        {
            "ticketNumber": ticket_number,
            "pin": pin,
            "timestamp": int(time.time() * 1000),
            "event": event_code,
        }
    )


@dataclass(frozen=True)
class QRCodeValidation:
    """Outcome of :func:`validate_qr_code_data`."""

    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def validate_qr_code_data(
    qr_data: str,
    event_code: str = EVENT_CODE,
    now_ms: Optional[int] = None,
) -> QRCodeValidation:
    """Parse and validate a QR payload.

    Args:
        qr_data: Raw text scanned from the QR code.
        event_code: Event code the payload must carry.
        now_ms: Current time in epoch milliseconds (defaults to the clock).

    Returns:
        A ``QRCodeValidation``; ``error`` explains a rejection.
    """
    try:
        parsed = json.loads(qr_data)
    except (TypeError, ValueError):
        return QRCodeValidation(valid=False, error="Invalid QR code data")

    if not isinstance(parsed, dict) or not all(
        parsed.get(key) for key in ("ticketNumber", "pin", "timestamp", "event")
    ):
        return QRCodeValidation(valid=False, error="Invalid QR code format")

    if parsed["event"] != event_code:
        return QRCodeValidation(valid=False, error="Invalid event code")

    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    try:
        age_ms = now_ms - int(parsed["timestamp"])
    except (TypeError, ValueError):
        return QRCodeValidation(valid=False, error="Invalid QR code format")
    if age_ms > QR_CODE_MAX_AGE_MS:
        return QRCodeValidation(valid=False, error="QR code has expired")

    return QRCodeValidation(valid=True, data=parsed)
