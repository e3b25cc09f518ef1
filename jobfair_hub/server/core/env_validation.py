"""
Startup environment validation.

Checks that the variables the service cannot run without are present and
reports optional ones that switch the service into a degraded mode.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Mapping, Optional, TypedDict

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS: List[str] = ["POSTGRES_URL", "AUTH_SECRET", "AUTH_URL"]

OPTIONAL_ENV_VARS: Dict[str, str] = {
    "REDIS_URL": "Redis not configured - using in-memory cache",
}


class EnvironmentStatus(TypedDict):
    is_valid: bool
    missing: List[str]
    warnings: List[str]


def validate_environment(env: Optional[Mapping[str, str]] = None) -> EnvironmentStatus:
    """Check required and optional environment variables.

    Args:
        env: Mapping to inspect; defaults to ``os.environ``.

    Returns:
        ``{"is_valid", "missing", "warnings"}``
    """
    env = os.environ if env is None else env
    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    warnings = [message for name, message in OPTIONAL_ENV_VARS.items() if not env.get(name)]
    return {"is_valid": not missing, "missing": missing, "warnings": warnings}


def log_environment_status(env: Optional[Mapping[str, str]] = None) -> EnvironmentStatus:
    status = validate_environment(env)
    if status["is_valid"]:
        logger.info("Environment validation passed")
    else:
        logger.error(f"Missing required environment variables: {', '.join(status['missing'])}")
    for warning in status["warnings"]:
        logger.warning(warning)
    return status
