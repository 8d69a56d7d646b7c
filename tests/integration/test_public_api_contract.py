from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from uxglossary.config.exceptions import UpstreamError
from uxglossary.domain.models import GlossaryRecord
from uxglossary.server.app import app
from uxglossary.server.dependencies import get_glossary_service
from uxglossary.services import GlossaryService

pytestmark = pytest.mark.integration

STARTED = datetime(2025, 6, 4, 12, 0, tzinfo=timezone.utc)


class _FailingStore:
    name = "github"

    async def load_all(self):
        raise UpstreamError("GitHub API error: 502", service="github", upstream_status=502)

    async def save_all(self, records, revision=None, message=None):
        raise AssertionError("reads must not write")

    def last_modified(self):
        return None


@pytest.fixture()
def client(memory_store):
    app.state.glossary_service = GlossaryService(memory_store, started_at=STARTED)
    with TestClient(app) as test_client:
        yield test_client
    app.state.glossary_service = None


@pytest.fixture(autouse=True)
def _cleanup_overrides():
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


def test_list_glossary(client):
    response = client.get("/api/glossary")

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == "no-store"
    body = response.json()
    assert [item["term"] for item in body] == ["404 Page", "Affordance", "Usability", "User Experience"]
    assert body[3] == {
        "letter": "U",
        "term": "User Experience",
        "definition": "Overall experience.",
        "acronym": "UX",
    }
    assert "acronym" not in body[0]


def test_letter_endpoint(client):
    assert [i["term"] for i in client.get("/api/glossary/letter/0-9").json()] == ["404 Page"]
    assert [i["term"] for i in client.get("/api/glossary/letter/u").json()] == ["Usability", "User Experience"]
    assert client.get("/api/glossary/letter/Q").json() == []


def test_letter_endpoint_rejects_invalid_letter(client):
    response = client.get("/api/glossary/letter/ab")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert response.json()["error"]["details"] == {"field": "letter"}


def test_search_endpoint(client):
    response = client.get("/api/glossary/search", params={"q": "ux"})
    assert response.status_code == 200
    assert [i["term"] for i in response.json()] == ["User Experience"]

    # Endpoint HTTP não aplica o mínimo de 2 caracteres da busca interativa
    assert len(client.get("/api/glossary/search", params={"q": "u"}).json()) >= 2


def test_search_requires_query(client):
    for params in ({}, {"q": ""}):
        response = client.get("/api/glossary/search", params=params)
        assert response.status_code == 400
        assert response.json()["success"] is False


def test_search_rejects_overlong_query(client):
    response = client.get("/api/glossary/search", params={"q": "x" * 201})
    assert response.status_code == 400


def test_last_updated(client):
    response = client.get("/api/glossary/last-updated")
    assert response.status_code == 200
    assert response.json() == {"lastUpdated": "4 June 2025", "iso": STARTED.isoformat()}


def test_status_reports_store(client):
    body = client.get("/api/status").json()
    assert body["status"] == "online"
    assert body["version"] == app.version
    assert body["glossary"]["store"] == "memory"
    assert body["glossary"]["records"] == 4
    assert "latency_ms" in body["glossary"]


def test_dependency_override_replaces_service(client, store_factory):
    other = store_factory([GlossaryRecord(term="Zeta", definition="Last.")])
    app.dependency_overrides[get_glossary_service] = lambda: GlossaryService(other)

    assert [i["term"] for i in client.get("/api/glossary").json()] == ["Zeta"]


def test_missing_document_without_fallback_is_empty(client, store_factory):
    app.dependency_overrides[get_glossary_service] = lambda: GlossaryService(store_factory([], exists=False))
    assert client.get("/api/glossary").json() == []


def test_upstream_failure_maps_to_error_envelope(client):
    app.dependency_overrides[get_glossary_service] = lambda: GlossaryService(_FailingStore())

    response = client.get("/api/glossary")
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "UPSTREAM_ERROR"
    assert response.json()["error"]["details"]["upstream_status"] == 502


def test_status_reports_store_failure(memory_store):
    app.state.glossary_service = GlossaryService(_FailingStore())
    try:
        with TestClient(app) as test_client:
            body = test_client.get("/api/status").json()
    finally:
        app.state.glossary_service = None

    assert body["status"] == "error"
    assert body["glossary"]["store"] == "github"
    assert body["glossary"]["error"] == "GitHub API error: 502"
