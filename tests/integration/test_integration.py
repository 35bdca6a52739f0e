"""
Integration test suite for a running PetCare inventory service.

Point INVENTORY_BASE_URL at a deployed instance and set JWT_SECRET to the
secret it signs tokens with. The suite is skipped when nothing answers.
"""

import os
import time
import uuid

import httpx
import jwt
import pytest

BASE_URL = os.getenv("INVENTORY_BASE_URL", "http://localhost:8000")
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
HEALTH_CHECK_RETRIES = int(os.getenv("HEALTH_CHECK_RETRIES", "3"))
HEALTH_CHECK_DELAY = 1

pytestmark = pytest.mark.integration


def _service_up(client: httpx.Client) -> bool:
    for _ in range(HEALTH_CHECK_RETRIES):
        try:
            if client.get("/health").status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(HEALTH_CHECK_DELAY)
    return False


class TestInventoryIntegration:
    """End-to-end flows against the live service"""

    @classmethod
    def setup_class(cls):
        cls.client = httpx.Client(base_url=BASE_URL, timeout=10.0)
        if not _service_up(cls.client):
            cls.client.close()
            pytest.skip(f"Inventory service not reachable at {BASE_URL}")
        token = jwt.encode({"sub": "integration", "role": "ADMIN"}, JWT_SECRET, algorithm="HS256")
        cls.headers = {"Authorization": f"Bearer {token}"}

    @classmethod
    def teardown_class(cls):
        cls.client.close()

    def _payload(self, name):
        return {"name": name, "quantity": 3, "category": "TestCategory", "supplier": "IntegrationSupplier"}

    def test_health_endpoints(self):
        for endpoint in ["/health", "/health/live", "/health/ready"]:
            response = self.client.get(endpoint)
            assert response.status_code in [200, 503]
            assert "status" in response.json()

    def test_item_lifecycle(self):
        name = f"Integration Item {uuid.uuid4().hex[:8]}"

        created = self.client.post("/api/inventory", json=self._payload(name), headers=self.headers)
        assert created.status_code == 201
        item_id = created.json()["id"]

        try:
            duplicate = self.client.post(
                "/api/inventory", json=self._payload(f"  {name.upper()} "), headers=self.headers
            )
            assert duplicate.status_code == 400
            assert duplicate.json()["duplicate"] is True

            hits = self.client.get("/api/inventory/search", params={"q": name.lower()}).json()
            assert [hit["id"] for hit in hits] == [item_id]

            updated = self.client.put(
                f"/api/inventory/{item_id}",
                json={**self._payload(name), "quantity": 9},
                headers=self.headers,
            )
            assert updated.status_code == 204
            assert self.client.get(f"/api/inventory/{item_id}").json()["quantity"] == 9
        finally:
            deleted = self.client.delete(f"/api/inventory/{item_id}", headers=self.headers)
            assert deleted.status_code == 204

        assert self.client.get(f"/api/inventory/{item_id}").status_code == 404

    def test_photo_upload_is_served(self):
        uploaded = self.client.post(
            "/api/inventory/upload-photo",
            files={"file": ("photo.png", b"integration-bytes", "image/png")},
            headers=self.headers,
        )
        assert uploaded.status_code == 200
        url = uploaded.json()["url"]
        assert "/images/inventory/" in url
        assert httpx.get(url, timeout=10.0).content == b"integration-bytes"
