import pytest

from uxglossary.config.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    GlossaryError,
    NotFoundError,
    ParseError,
    UpstreamError,
    ValidationError,
)

pytestmark = pytest.mark.unit


def test_glossary_error_defaults():
    exc = GlossaryError("oops")
    assert exc.message == "oops"
    assert exc.code == "GLOSSARY_ERROR"
    assert exc.status_code == 500


def test_configuration_error_contract():
    exc = ConfigurationError("bad config")
    assert exc.code == "CONFIG_ERROR"
    assert exc.status_code == 500
    assert "bad config" in str(exc)


def test_validation_error_contract():
    exc = ValidationError("bad field", field="letter", errors=["Line 2: x"])
    assert exc.code == "VALIDATION_ERROR"
    assert exc.status_code == 400
    assert exc.field == "letter"
    assert exc.errors == ["Line 2: x"]


def test_authentication_error_contract():
    exc = AuthenticationError()
    assert exc.code == "UNAUTHORIZED"
    assert exc.status_code == 401
    assert exc.message == "Unauthorized"


def test_not_found_error_with_identifier():
    exc = NotFoundError("Term", "Wireframe")
    assert exc.code == "NOT_FOUND"
    assert exc.status_code == 404
    assert exc.resource == "Term"
    assert exc.identifier == "Wireframe"
    assert exc.message == "Term 'Wireframe' not found"


def test_not_found_error_without_identifier():
    exc = NotFoundError("Glossary file")
    assert exc.identifier is None
    assert exc.message == "Glossary file not found"


def test_conflict_error_contract():
    exc = ConflictError("Term 'X' already exists", identifier="X")
    assert exc.code == "CONFLICT"
    assert exc.status_code == 409
    assert exc.identifier == "X"


def test_upstream_error_contract():
    exc = UpstreamError("GitHub API error: 502", service="github", upstream_status=502)
    assert exc.code == "UPSTREAM_ERROR"
    assert exc.status_code == 500
    assert exc.service == "github"
    assert exc.upstream_status == 502


def test_parse_error_contract():
    exc = ParseError("Unterminated quoted field", line=3)
    assert exc.code == "PARSE_ERROR"
    assert exc.status_code == 400
    assert exc.line == 3
    assert isinstance(exc, GlossaryError)
