"""
Role claim normalization shared by the inventory API and the admin portal.

Identity payloads arrive in two accepted shapes:

    {"roles": ["Admin", {"name": "staff"}]}
    {"user": {"role": "admin"}}

They are parsed once at the boundary into a tagged union and then reduced
to a single canonical set of uppercase role names. Call sites only ever
see the canonical set.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Tuple, Union

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class RolesClaim:
    """`roles` sequence; entries are strings or objects with a `name`."""
    roles: Tuple[Any, ...]


@dataclass(frozen=True)
class UserRoleClaim:
    """Singular `user.role` field."""
    role: Any


@dataclass(frozen=True)
class NoClaim:
    """Payload carried neither accepted shape."""


IdentityClaim = Union[RolesClaim, UserRoleClaim, NoClaim]


def parse_identity(payload: Any) -> IdentityClaim:
    """Classify an identity-check response body."""
    if not isinstance(payload, dict):
        return NoClaim()

    roles = payload.get("roles")
    if isinstance(roles, (list, tuple)):
        return RolesClaim(tuple(roles))

    user = payload.get("user")
    if isinstance(user, dict) and user.get("role"):
        return UserRoleClaim(user["role"])

    return NoClaim()


def parse_token_claims(claims: Any) -> IdentityClaim:
    """Classify decoded JWT claims (`roles` list or flat `role` string)."""
    if not isinstance(claims, dict):
        return NoClaim()
    if isinstance(claims.get("roles"), (list, tuple)):
        return RolesClaim(tuple(claims["roles"]))
    if claims.get("role"):
        return UserRoleClaim(claims["role"])
    return NoClaim()


def _role_name(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        return str(entry.get("name") or "")
    return str(entry)


def canonical_roles(claim: IdentityClaim) -> FrozenSet[str]:
    """Reduce any claim shape to a set of trimmed uppercase role names."""
    if isinstance(claim, RolesClaim):
        names = [_role_name(entry) for entry in claim.roles]
    elif isinstance(claim, UserRoleClaim):
        names = [_role_name(claim.role)]
    else:
        names = []
    return frozenset(name.strip().upper() for name in names if name and name.strip())


def normalize_roles(payload: Any) -> FrozenSet[str]:
    """Shortcut: identity response body -> canonical role set."""
    return canonical_roles(parse_identity(payload))


def is_admin(roles: FrozenSet[str]) -> bool:
    return ADMIN_ROLE in roles
