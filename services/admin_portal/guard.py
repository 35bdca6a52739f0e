"""
Admin route guard for the portal.

Decision flow for one protected page view:

    no session token          -> NO_TOKEN      (redirect to login)
    cached role is ADMIN      -> CACHED_ADMIN  (render, no network call)
    otherwise                 -> VERIFYING     -> ALLOWED | DENIED

The cached role is only a fast path for the UI. The inventory API checks
the token's role again on every write.

Verification asks the identity endpoints in order. A 200 ends the walk
and its body decides; a 401 ends the walk as denied; any other status
moves on to the next endpoint. Transport errors, unreadable bodies and
role sets without ADMIN are all denials. Nothing is retried.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import httpx

from shared.core import ADMIN_ROLE, get_logger, is_admin, normalize_roles

logger = get_logger(__name__)

IDENTITY_PATHS = ("/users/me", "/auth/me")


class GuardState(str, Enum):
    NO_TOKEN = "no_token"
    CACHED_ADMIN = "cached_admin"
    VERIFYING = "verifying"
    ALLOWED = "allowed"
    DENIED = "denied"


RENDER_STATES = frozenset({GuardState.CACHED_ADMIN, GuardState.ALLOWED})


@dataclass(frozen=True)
class SessionContext:
    """What the portal knows about the caller before any network call."""
    token: Optional[str] = None
    cached_role: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return bool(self.token and self.token.strip())

    @property
    def cached_admin(self) -> bool:
        return (self.cached_role or "").strip().upper() == ADMIN_ROLE


async def verify_admin(
    client: Optional[httpx.AsyncClient],
    token: str,
    paths: Sequence[str] = IDENTITY_PATHS,
) -> bool:
    """Ask the identity endpoints whether `token` carries the ADMIN role."""
    if client is None:
        logger.warning("Admin verification skipped: no inventory API configured")
        return False

    headers = {"Authorization": f"Bearer {token}"}
    roles = frozenset()
    try:
        for path in paths:
            response = await client.get(path, headers=headers)
            if response.status_code == 200:
                roles = normalize_roles(response.json())
                break
            if response.status_code == 401:
                logger.info(f"Identity check rejected the session at {path}")
                break
            logger.info(f"Identity endpoint {path} answered {response.status_code}; trying next")
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Admin verification failed: {e}")
        return False

    return is_admin(roles)


class AdminGuard:
    """
    One guard instance per protected page view.

    `mount()` returns the immediate decision and, when a round-trip is
    needed, starts verification as a task. `wait()` resolves the final
    state. `unmount()` cancels a pending verification; a response that
    arrives afterwards no longer changes the state.
    """

    def __init__(
        self,
        session: SessionContext,
        client: Optional[httpx.AsyncClient],
        paths: Sequence[str] = IDENTITY_PATHS,
    ):
        self.session = session
        self.client = client
        self.paths = tuple(paths)
        self.state: Optional[GuardState] = None
        self._task: Optional[asyncio.Task] = None
        self._mounted = False

    @property
    def allows_render(self) -> bool:
        return self.state in RENDER_STATES

    def mount(self) -> GuardState:
        self._mounted = True
        if not self.session.has_token:
            self.state = GuardState.NO_TOKEN
        elif self.session.cached_admin:
            self.state = GuardState.CACHED_ADMIN
        else:
            self.state = GuardState.VERIFYING
            self._task = asyncio.get_running_loop().create_task(self._verify())
        return self.state

    async def wait(self) -> GuardState:
        if self.state is None:
            self.mount()
        if self._task is not None and not self._task.done():
            try:
                await self._task
            except asyncio.CancelledError:
                if self._mounted:
                    raise
        return self.state

    def unmount(self) -> None:
        self._mounted = False
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _verify(self) -> None:
        allowed = await verify_admin(self.client, self.session.token, self.paths)
        if not self._mounted:
            return
        self.state = GuardState.ALLOWED if allowed else GuardState.DENIED
        logger.info(f"Admin verification finished: {self.state.value}")
