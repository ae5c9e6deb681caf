"""Pytest configuration and fixtures."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from formsync.config import Settings, get_settings
from formsync.main import app
from formsync.routers.submit import get_keap_transport, get_notification_transport


class FakeKeap:
    """In-memory stand-in for the Keap REST API, recording every request."""

    def __init__(self, existing=None, new_id=101, fail=None):
        self.existing = existing or []
        self.new_id = new_id
        # {(method, path suffix): status code}
        self.fail = fail or {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        for (fail_method, suffix), status in self.fail.items():
            if method == fail_method and path.endswith(suffix):
                return httpx.Response(status, text="Keap says no")

        if method == "GET" and path.endswith("/contacts"):
            return httpx.Response(200, json={"contacts": self.existing})
        if method == "POST" and path.endswith("/contacts"):
            return httpx.Response(201, json={"id": self.new_id})
        if method == "PATCH":
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1]})
        if method == "POST" and path.endswith("/tags"):
            return httpx.Response(204)
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def calls(self):
        return [(r.method, r.url.path.split("/rest/v2", 1)[-1]) for r in self.requests]

    def body(self, index: int):
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    """Settings with the field/tag IDs used across tests."""
    return Settings(
        _env_file=None,
        keap_access_token="test-token",
        keap_role_field_id=42,
        keap_questions_field_id=43,
        keap_interest_field_id=44,
        keap_challenges_field_id=45,
        keap_preferred_contact_field_id=46,
        keap_workshop_tag_id=7,
        keap_corporate_tag_id=8,
        resend_api_key=None,
    )


@pytest.fixture
def fake_keap():
    return FakeKeap()


@pytest.fixture
def client(settings, fake_keap):
    """Test client wired to the fake Keap API."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_keap_transport] = lambda: fake_keap.transport
    app.dependency_overrides[get_notification_transport] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()
