from typing import Optional

from fastapi import APIRouter, Depends
from app.auth import bearer_claims, token_roles
from shared.core import ADMIN_ROLE

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _primary_role(claims: dict, roles: frozenset) -> Optional[str]:
    if ADMIN_ROLE in roles:
        return ADMIN_ROLE
    role = claims.get("role")
    if isinstance(role, str) and role.strip():
        return role.strip().upper()
    return None

@router.get("/me")
async def who_am_i(claims: dict = Depends(bearer_claims)):
    """Identity check used by the admin portal guard."""
    roles = token_roles(claims)
    return {
        "roles": sorted(roles),
        "user": {"id": claims.get("sub"), "role": _primary_role(claims, roles)},
    }
