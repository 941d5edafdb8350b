"""
Shared fixtures: an in-memory stand-in for the record-keeping REST API,
served through httpx.MockTransport, and a Flask app wired to it.
"""
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from wms import create_app
from wms.models import ENTITIES

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def day(offset):
    """ISO date ``offset`` days from NOW."""
    return (NOW + timedelta(days=offset)).strftime("%Y-%m-%d")


class FakeBackend:
    """Keeps one list per collection and answers the REST calls the screens make."""

    def __init__(self, now=NOW):
        self.now = now
        self.collections = {endpoint: [] for endpoint in ENTITIES}
        self.failing = set()
        self.calls = []

    def seed(self, endpoint, *rows):
        self.collections[endpoint].extend(dict(r) for r in rows)

    def fail(self, endpoint, method="GET"):
        self.failing.add((endpoint, method))

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    def _matches(self, endpoint, row, key, body):
        schema = ENTITIES[endpoint]
        if str(row.get(schema.key)) != key:
            return False
        if schema.is_register:
            wanted = str((body or {}).get("Record_Date", "")).split("T")[0]
            return str(row.get("Record_Date", "")).split("T")[0] == wanted
        return True

    def _alerts(self, rows):
        from wms_utils.validity import classify

        return [
            r for r in rows
            if r.get("Status") == "Active" and classify(r.get("Validity_Date"), self.now).is_alert
        ]

    def handler(self, request):
        parts = request.url.path.strip("/").split("/")[1:]  # drop "api"
        endpoint, rest = parts[0], parts[1:]
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))

        if (endpoint, request.method) in self.failing or endpoint not in self.collections:
            return httpx.Response(500, json={"error": "boom"})

        rows = self.collections[endpoint]
        if request.method == "GET":
            if rest == ["alerts"]:
                return httpx.Response(200, json=self._alerts(rows))
            return httpx.Response(200, json=rows)

        if request.method == "POST":
            record = dict(body)
            if ENTITIES[endpoint].is_register:
                record.setdefault("Record_Date", self.now.strftime("%Y-%m-%d"))
                record.setdefault("Alert_Completed", False)
            rows.append(record)
            return httpx.Response(201, json=record)

        key = rest[0]
        match = next((r for r in rows if self._matches(endpoint, r, key, body)), None)
        if match is None:
            return httpx.Response(404, json={"error": "not found"})

        if request.method == "PUT" and rest[1:] in (["complete-alert"], ["incomplete-alert"]):
            match["Alert_Completed"] = rest[1] == "complete-alert"
            return httpx.Response(200, json=match)
        if request.method == "PUT":
            match.update(body)
            return httpx.Response(200, json=match)
        if request.method == "DELETE":
            rows.remove(match)
            return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(405)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend, tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "API_BASE_URL": "http://api.test",
        "API_TRANSPORT": backend.transport,
        "RATELIMIT_ENABLED": False,
        "CLOCK": lambda: NOW,
        "AUDIT_LOG_FILE": str(tmp_path / "audit.log"),
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    response = client.post("/auth/login", json={"userId": "user", "password": "user123"})
    assert response.status_code == 200
    return client


@pytest.fixture
def gateway_for(backend):
    from wms.gateway import RemoteGateway

    def build(endpoint):
        return RemoteGateway(ENTITIES[endpoint], "http://api.test", transport=backend.transport)
    return build
