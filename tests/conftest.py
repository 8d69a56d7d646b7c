import base64
import json
import os
import sys
from typing import Optional

import httpx
import pytest

# Ensure project root is in path for imports to work
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from uxglossary.config.settings import settings
from uxglossary.domain.models import GlossaryRecord, StoreSnapshot
from uxglossary.server.rate_limit import login_rate_limiter


class InMemoryStore:
    """Store fake com a mesma interface dos stores reais; registra cada save."""

    name = "memory"

    def __init__(self, records=None, exists: Optional[bool] = None, revision: Optional[str] = None):
        self.records = list(records or [])
        self.exists = bool(records) if exists is None else exists
        self.revision = revision
        self.saves = []
        self.modified = None

    async def load_all(self) -> StoreSnapshot:
        return StoreSnapshot(records=list(self.records), revision=self.revision, exists=self.exists)

    async def save_all(self, records, revision=None, message=None):
        self.records = list(records)
        self.exists = True
        self.saves.append({"records": list(records), "revision": revision, "message": message})
        return revision

    def last_modified(self):
        return self.modified


class FakeGitHub:
    """
    Simula a Contents API: um único arquivo versionado por sha.

    PUT com sha desatualizado → 409; PUT sem sha sobre arquivo existente → 422.
    """

    def __init__(self, text: Optional[str] = None, user_status: int = 200, repo_status: int = 200,
                 branch_status: int = 200, push: bool = True):
        self.text = text
        self.sha = "sha-1" if text is not None else None
        self.version = 1
        self.user_status = user_status
        self.repo_status = repo_status
        self.branch_status = branch_status
        self.push = push
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/user":
            if self.user_status != 200:
                return httpx.Response(self.user_status, text="Bad credentials")
            return httpx.Response(200, json={"login": "octocat"})
        if "/contents/" in path:
            if request.method == "GET":
                if self.text is None:
                    return httpx.Response(404, json={"message": "Not Found"})
                content = base64.b64encode(self.text.encode("utf-8")).decode("ascii")
                # A API real quebra o base64 em linhas
                wrapped = "\n".join(content[i:i + 60] for i in range(0, len(content), 60))
                return httpx.Response(200, json={"content": wrapped, "sha": self.sha})
            body = json.loads(request.content)
            sent_sha = body.get("sha")
            if self.text is not None and sent_sha is None:
                return httpx.Response(422, json={"message": "sha wasn't supplied"})
            if self.text is not None and sent_sha != self.sha:
                return httpx.Response(409, json={"message": "does not match"})
            self.text = base64.b64decode(body["content"]).decode("utf-8")
            self.version += 1
            self.sha = f"sha-{self.version}"
            return httpx.Response(201, json={"content": {"sha": self.sha}})
        if "/branches/" in path:
            if self.branch_status != 200:
                return httpx.Response(self.branch_status, text="Branch not found")
            return httpx.Response(200, json={"name": path.rsplit("/", 1)[-1]})
        if path.startswith("/repos/"):
            if self.repo_status != 200:
                return httpx.Response(self.repo_status, text="Not Found")
            return httpx.Response(
                200,
                json={"name": path.rsplit("/", 1)[-1], "private": False, "permissions": {"push": self.push}},
            )
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def records():
    return [
        GlossaryRecord(term="Usability", definition="Ease of use.", acronym=None),
        GlossaryRecord(term="User Experience", definition="Overall experience.", acronym="UX"),
        GlossaryRecord(term="Affordance", definition="Perceived action possibilities."),
        GlossaryRecord(term="404 Page", definition="Not found page."),
    ]


@pytest.fixture
def memory_store(records):
    return InMemoryStore(records)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def admin_credentials(monkeypatch):
    monkeypatch.setattr(settings.auth, "admin_password", "correct-horse")
    monkeypatch.setattr(settings.auth, "admin_password_previous", "")
    monkeypatch.setattr(settings.auth, "admin_token", "automation-token")
    monkeypatch.setattr(settings.auth, "admin_token_previous", "")
    monkeypatch.setattr(settings.auth, "secret_key", "test-secret-key-with-enough-length-for-hs256")
    login_rate_limiter.reset()
    yield
    login_rate_limiter.reset()


@pytest.fixture
def store_factory():
    return InMemoryStore


@pytest.fixture
def github_factory():
    return FakeGitHub
