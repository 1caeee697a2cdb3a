import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.application.services.auth_service import ensure_bootstrap_admin
from backoffice.config import Settings
from backoffice.domain.schemas.asset import ImageRef, IncomingFile
from backoffice.infrastructure.database import Base, get_db
from backoffice.interfaces.deps import get_image_host
from backoffice.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Secret123"


class FakeImageHost:
    """Records every call; the public id is the uploaded file's name stem."""

    def __init__(self):
        self.calls = []

    def upload(self, file: IncomingFile) -> ImageRef:
        public_id = file.filename.rsplit(".", 1)[0]
        self.calls.append(("upload", public_id))
        return ImageRef(public_id=public_id, url=f"https://res.cloudinary.test/{public_id}.png")

    def destroy(self, public_id: str) -> None:
        self.calls.append(("destroy", public_id))


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def client(session_factory, image_host):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_host] = lambda: image_host
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def bootstrap_admin(session_factory):
    settings = Settings(
        BOOTSTRAP_ADMIN_USERNAME="root",
        BOOTSTRAP_ADMIN_EMAIL=ADMIN_EMAIL,
        BOOTSTRAP_ADMIN_PASSWORD=ADMIN_PASSWORD,
    )
    with session_factory() as db:
        admin = ensure_bootstrap_admin(db, settings)
        return {"id": admin.id, "role_id": admin.role_id, "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}


@pytest.fixture
def admin_client(client, bootstrap_admin):
    response = client.post(
        "/api/admin/login",
        json={"email": bootstrap_admin["email"], "password": bootstrap_admin["password"]},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def make_category(client):
    def _make(name: str) -> dict:
        response = client.post("/api/category/create", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()["category"]

    return _make


@pytest.fixture
def make_role(client):
    def _make(name: str = "manager", status: str = "active", limit: int = 5) -> dict:
        response = client.post("/api/role/create", json={"name": name, "status": status, "limit": limit})
        assert response.status_code == 201, response.text
        return response.json()["role"]

    return _make

