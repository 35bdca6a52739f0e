import httpx
import pytest
from fastapi.testclient import TestClient

from admin_portal.main import app, get_api_client

ITEMS = [
    {"id": "1", "name": "<Kibble>", "quantity": 3, "category": "Food", "supplier": "Acme", "expiryDate": None},
    {"id": "2", "name": "Chew Toy", "quantity": 0, "category": "Toys", "supplier": "Bros", "expiryDate": None},
]


@pytest.fixture
def api_calls():
    return []


@pytest.fixture
def use_api(api_calls):
    """Route the portal's API client to an in-process mock answering from `responses`."""

    def install(responses):
        def handler(request):
            api_calls.append(request.url.path)
            return responses.get(request.url.path, httpx.Response(404))

        async def client_override():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api/api") as client:
                yield client

        app.dependency_overrides[get_api_client] = client_override

    yield install
    app.dependency_overrides.clear()


def _portal(**cookies):
    return TestClient(app, cookies=cookies)


def test_no_token_redirects_to_login(use_api, api_calls):
    use_api({})
    resp = _portal().get("/admin/inventory", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login?next=/admin/inventory"
    assert api_calls == []


def test_cached_admin_renders_without_identity_call(use_api, api_calls):
    use_api({"/api/inventory": httpx.Response(200, json=ITEMS)})

    resp = _portal(APP_AT="tok", APP_ROLE="ADMIN").get("/admin/inventory", follow_redirects=False)

    assert resp.status_code == 200
    assert "&lt;Kibble&gt;" in resp.text
    assert "<Kibble>" not in resp.text
    assert "Chew Toy" in resp.text
    assert api_calls == ["/api/inventory"]


def test_verified_admin_renders(use_api, api_calls):
    use_api({
        "/api/auth/me": httpx.Response(200, json={"roles": ["ADMIN"], "user": {"id": "u", "role": "ADMIN"}}),
        "/api/inventory": httpx.Response(200, json=ITEMS),
    })

    resp = _portal(APP_AT="tok").get("/admin/inventory", follow_redirects=False)

    assert resp.status_code == 200
    assert "<table>" in resp.text
    assert api_calls == ["/api/users/me", "/api/auth/me", "/api/inventory"]


def test_rejected_session_redirects_to_landing(use_api, api_calls):
    use_api({"/api/users/me": httpx.Response(401)})

    resp = _portal(APP_AT="tok", APP_ROLE="staff").get("/admin/inventory", follow_redirects=False)

    assert resp.status_code == 302
    assert resp.headers["location"] == "/owner"
    assert api_calls == ["/api/users/me"]


def test_non_admin_redirects_to_landing(use_api):
    use_api({"/api/users/me": httpx.Response(200, json={"roles": ["STAFF"]})})
    resp = _portal(APP_AT="tok").get("/admin/inventory", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/owner"


def test_unconfigured_api_denies_unless_cached():
    async def no_client():
        yield None

    app.dependency_overrides[get_api_client] = no_client
    try:
        denied = _portal(APP_AT="tok").get("/admin/inventory", follow_redirects=False)
        cached = _portal(APP_AT="tok", APP_ROLE="admin").get("/admin/inventory", follow_redirects=False)
    finally:
        app.dependency_overrides.clear()

    assert denied.status_code == 302
    assert denied.headers["location"] == "/owner"
    assert cached.status_code == 503


def test_inventory_failure_is_bad_gateway(use_api):
    use_api({"/api/inventory": httpx.Response(500)})
    resp = _portal(APP_AT="tok", APP_ROLE="ADMIN").get("/admin/inventory", follow_redirects=False)
    assert resp.status_code == 502


def test_security_headers_and_health():
    resp = _portal().get("/health")
    assert resp.status_code == 200
    assert resp.json()["service"] == "admin-portal"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
