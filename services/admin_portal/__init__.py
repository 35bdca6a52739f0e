"""Admin portal: role-gated pages over the inventory API."""

from .guard import AdminGuard, GuardState, SessionContext, verify_admin

__all__ = ["AdminGuard", "GuardState", "SessionContext", "verify_admin"]
