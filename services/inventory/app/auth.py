"""Bearer-token checks for the inventory API.

Tokens are minted elsewhere; this module only decodes them and reads their
role claims. Every write endpoint re-checks the ADMIN role server-side,
whatever the admin portal decided on its side.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request

from shared.core import canonical_roles, is_admin, parse_token_claims, set_request_context
from .core_settings import get_settings, Settings

BEARER_PREFIX = "Bearer "

def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except jwt.PyJWTError:
        return None

async def bearer_claims(request: Request, settings: Settings = Depends(get_settings)) -> dict:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Missing token", headers={"WWW-Authenticate": "Bearer"})
    token_data = decode_access_token(auth_header[len(BEARER_PREFIX):].strip(), settings)
    if not token_data:
        raise HTTPException(status_code=401, detail="Invalid token", headers={"WWW-Authenticate": "Bearer"})
    if token_data.get("sub"):
        set_request_context(user_id=str(token_data["sub"]))
    return token_data

def token_roles(claims: dict) -> frozenset:
    return canonical_roles(parse_token_claims(claims))

async def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> Optional[dict]:
    if not settings.REQUIRE_ADMIN:
        return None
    claims = await bearer_claims(request, settings)
    if not is_admin(token_roles(claims)):
        raise HTTPException(status_code=403, detail="Admin access required")
    return claims
