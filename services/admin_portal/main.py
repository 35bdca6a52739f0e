"""Admin portal for the PetCare inventory"""
import html
from typing import AsyncIterator, List, Optional
from urllib.parse import quote

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.core import RequestLoggingMiddleware, ServiceHealth, get_logger, setup_logging
from .core_settings import Settings, get_settings
from .guard import AdminGuard, GuardState, SessionContext

settings = get_settings()
SERVICE_NAME = "admin-portal"

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL)
logger = get_logger(__name__)

app = FastAPI(title="PetCare Admin Portal", docs_url=None, redoc_url=None)

# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        return response

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(ServiceHealth(SERVICE_NAME, settings.SERVICE_VERSION).create_health_router())


def session_from_request(request: Request, settings: Settings = Depends(get_settings)) -> SessionContext:
    return SessionContext(
        token=request.cookies.get(settings.TOKEN_COOKIE),
        cached_role=request.cookies.get(settings.ROLE_COOKIE),
    )


async def get_api_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[Optional[httpx.AsyncClient]]:
    if not settings.INVENTORY_API_BASE_URL:
        yield None
        return
    async with httpx.AsyncClient(base_url=settings.INVENTORY_API_BASE_URL, timeout=settings.HTTP_TIMEOUT_SEC) as client:
        yield client


async def _fetch_inventory(client: httpx.AsyncClient, token: str) -> List[dict]:
    response = await client.get("/inventory", headers={"Authorization": f"Bearer {token}"})
    response.raise_for_status()
    return response.json()


def _render_inventory(items: List[dict]) -> str:
    columns = ("name", "quantity", "category", "supplier", "expiryDate")
    head = "".join(f"<th>{html.escape(col)}</th>" for col in columns)
    rows = "".join(
        "<tr>" + "".join(f"<td>{html.escape(str(item.get(col) or ''))}</td>" for col in columns) + "</tr>"
        for item in items
    )
    return (
        "<!doctype html><html><head><title>Inventory admin</title></head><body>"
        f"<h1>Inventory</h1><table><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table>"
        "</body></html>"
    )


@app.get("/admin/inventory", response_class=HTMLResponse)
async def admin_inventory(
    request: Request,
    session: SessionContext = Depends(session_from_request),
    client: Optional[httpx.AsyncClient] = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    """Inventory admin page behind the admin guard"""
    guard = AdminGuard(session, client)
    guard.mount()
    try:
        state = await guard.wait()
    finally:
        guard.unmount()

    if state == GuardState.NO_TOKEN:
        return RedirectResponse(f"{settings.LOGIN_PATH}?next={quote(request.url.path)}", status_code=302)
    if not guard.allows_render:
        return RedirectResponse(settings.LANDING_PATH, status_code=302)

    if client is None:
        return HTMLResponse("<h1>Inventory API not configured</h1>", status_code=503)
    try:
        items = await _fetch_inventory(client, session.token)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Inventory fetch failed: {e}")
        return HTMLResponse("<h1>Inventory is unavailable</h1>", status_code=502)
    return HTMLResponse(_render_inventory(items))


@app.get("/")
async def root():
    return {"service": SERVICE_NAME, "version": settings.SERVICE_VERSION, "admin": "/admin/inventory"}
