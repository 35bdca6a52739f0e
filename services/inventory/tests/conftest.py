import os
import tempfile

# Settings are read once at import time by app.core_settings.get_settings
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("STATIC_ROOT", tempfile.mkdtemp(prefix="petcare-static-"))
os.environ.setdefault("JWT_SECRET", "test-secret-with-at-least-32-bytes!!")

import jwt
import pytest
from fastapi.testclient import TestClient

from app.core_settings import get_settings
from app.domain.models import Base
from app.infrastructure.db import engine
from app.infrastructure.photo_store import LocalPhotoStore
from app.api.routes import get_photo_store
from app.main import app


def _make_token(**claims) -> str:
    settings = get_settings()
    payload = {"sub": "tester", **claims}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


@pytest.fixture
def make_token():
    return _make_token


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {_make_token(role='admin')}"}


@pytest.fixture
def staff_headers():
    return {"Authorization": f"Bearer {_make_token(roles=['staff'])}"}


@pytest.fixture
def photo_dir(tmp_path):
    return tmp_path / "images" / "inventory"


@pytest.fixture
def client(photo_dir):
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    app.dependency_overrides[get_photo_store] = lambda: LocalPhotoStore(str(photo_dir))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(engine)
