from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.resovista.resovista.container import build_container
from src.resovista.resovista.main import create_app
from src.resovista.resovista.storage.blob_storage import LocalBlobStorage
from src.resovista.resovista.storage.memory_kv_store import InMemoryKVStore
from src.resovista.resovista.users.model import CurrentUser

SECRET = "test-secret"
PASSWORD = "secret123"


class TickingClock:
    """Returns ``start`` then advances one second per call, so ids never collide."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 1, 10, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def kv():
    return InMemoryKVStore()


@pytest.fixture
def blobs(tmp_path):
    storage = LocalBlobStorage(
        tmp_path / "blobs", bucket="resovista-documents", secret_key=SECRET, url_base="/api/documents/download"
    )
    storage.ensure_bucket()
    return storage


@pytest.fixture
def container(kv, blobs, clock):
    return build_container(kv=kv, blobs=blobs, secret_key=SECRET, clock=clock)


def sign_up(container, email: str, role: str, name: str = "") -> CurrentUser:
    profile = container.auth_service.sign_up(email=email, password=PASSWORD, name=name or email.split("@")[0], role=role)
    return CurrentUser(id=profile.id, email=profile.email, role=profile.role, name=profile.name)


@pytest.fixture
def teacher(container):
    return sign_up(container, "teacher@example.com", "teacher", "Ada Teacher")


@pytest.fixture
def student(container):
    return sign_up(container, "student@example.com", "student", "Sam Student")


@pytest.fixture
def other_student(container):
    return sign_up(container, "other@example.com", "student", "Olive Other")


@pytest.fixture
def admin(container):
    return sign_up(container, "admin@example.com", "admin", "Alex Admin")


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(container, email: str) -> dict:
    token = container.auth_service.sign_in(email=email, password=PASSWORD).access_token
    return {"Authorization": f"Bearer {token}"}
