from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from service_request import create_app
from service_request.core.config import Settings
from service_request.db.session import create_db_engine, init_db
from service_request.errors import NotifyError
from service_request.services.store import SubmissionStore
from service_request.services.submissions import SubmissionService

JANE = {
    "fullName": "Jane Doe",
    "contactNumber": "+1-555-0100",
    "serviceType": "Web Development",
    "projectDescription": "Build a site",
}


class RecordingNotifier:
    """Notifier double that records every send and can be told to fail."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail_with: str | None = None

    def send(self, recipient: str, subject: str, body: str) -> None:
        self.sent.append((recipient, subject, body))
        if self.fail_with:
            raise NotifyError(self.fail_with)


class DeferredDispatcher:
    """Collects tasks instead of running them so tests control when they fire."""

    def __init__(self) -> None:
        self.tasks = []

    def submit(self, task) -> None:
        self.tasks.append(task)

    def run_all(self) -> None:
        tasks, self.tasks = self.tasks, []
        for task in tasks:
            task.func()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret",
        admin_username="admin",
        admin_password="password123",
        admin_email="owner@example.com",
        sender_email="noreply@example.com",
    )


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> SubmissionStore:
    return SubmissionStore(engine)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher() -> DeferredDispatcher:
    return DeferredDispatcher()


@pytest.fixture
def service(store, notifier, dispatcher) -> SubmissionService:
    return SubmissionService(store=store, notifier=notifier, dispatcher=dispatcher, recipient="owner@example.com")


@pytest.fixture
def app(settings, notifier):
    return create_app(settings, notifier=notifier)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client) -> dict[str, str]:
    response = client.post("/api/admin/login", json={"username": "admin", "password": "password123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
