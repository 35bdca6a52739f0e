"""Shared core utilities for the PetCare services.

Health checks, structured logging and role-claim normalization used by both
the inventory API and the admin portal.
"""

from .health import ServiceHealth, HealthStatus
from .logging_config import (
    setup_logging,
    get_logger,
    RequestLoggingMiddleware,
    set_request_context,
    generate_request_id,
    LoggerAdapter,
)
from .roles import (
    ADMIN_ROLE,
    RolesClaim,
    UserRoleClaim,
    NoClaim,
    parse_identity,
    parse_token_claims,
    canonical_roles,
    normalize_roles,
    is_admin,
)

__all__ = [
    # Health checks
    "ServiceHealth",
    "HealthStatus",
    # Logging
    "setup_logging",
    "get_logger",
    "RequestLoggingMiddleware",
    "set_request_context",
    "generate_request_id",
    "LoggerAdapter",
    # Roles
    "ADMIN_ROLE",
    "RolesClaim",
    "UserRoleClaim",
    "NoClaim",
    "parse_identity",
    "parse_token_claims",
    "canonical_roles",
    "normalize_roles",
    "is_admin",
]
