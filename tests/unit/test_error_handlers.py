import json

import pytest
from starlette.requests import Request

from uxglossary.config.exceptions import ConflictError, UpstreamError, ValidationError
from uxglossary.server import error_handlers

pytestmark = pytest.mark.unit


def _request(path: str = "/api/test") -> Request:
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }
    return Request(scope)


@pytest.mark.asyncio
async def test_glossary_exception_handler_uses_warning_for_4xx(monkeypatch):
    calls = []
    monkeypatch.setattr(error_handlers.logger, "warning", lambda msg: calls.append(("warning", msg)))
    monkeypatch.setattr(error_handlers.logger, "error", lambda msg: calls.append(("error", msg)))

    exc = ValidationError("No valid terms found in CSV", field="csv", errors=["Line 2: bad"])
    response = await error_handlers.glossary_exception_handler(_request("/api/admin/upload-csv"), exc)

    payload = json.loads(response.body)
    assert response.status_code == 400
    assert payload["success"] is False
    assert payload["error"]["code"] == "VALIDATION_ERROR"
    assert payload["error"]["details"] == {"field": "csv", "errors": ["Line 2: bad"]}
    assert calls and calls[0][0] == "warning"


@pytest.mark.asyncio
async def test_glossary_exception_handler_conflict_details():
    response = await error_handlers.glossary_exception_handler(
        _request("/api/admin/terms"), ConflictError("Term 'A' already exists", identifier="A")
    )
    payload = json.loads(response.body)
    assert response.status_code == 409
    assert payload["error"]["details"] == {"identifier": "A"}


@pytest.mark.asyncio
async def test_glossary_exception_handler_uses_error_for_5xx(monkeypatch):
    calls = []
    monkeypatch.setattr(error_handlers.logger, "warning", lambda msg: calls.append(("warning", msg)))
    monkeypatch.setattr(error_handlers.logger, "error", lambda msg: calls.append(("error", msg)))

    exc = UpstreamError("GitHub API error: 502", service="github", upstream_status=502)
    response = await error_handlers.glossary_exception_handler(_request("/api/glossary"), exc)

    assert response.status_code == 500
    assert json.loads(response.body)["error"]["details"] == {"service": "github", "upstream_status": 502}
    assert calls and calls[0][0] == "error"


@pytest.mark.asyncio
async def test_generic_exception_handler_returns_sanitized_payload(monkeypatch):
    captured = []
    monkeypatch.setattr(error_handlers.logger, "exception", lambda msg: captured.append(msg))

    response = await error_handlers.generic_exception_handler(
        _request("/api/unknown"),
        RuntimeError("internal stack"),
    )

    payload = response.body.decode("utf-8")
    assert response.status_code == 500
    assert '"code":"INTERNAL_ERROR"' in payload
    assert '"details":null' in payload
    assert "internal stack" not in payload
    assert captured
