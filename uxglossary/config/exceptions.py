"""
Custom exceptions for the UX Glossary.
Exception hierarchy for consistent error handling.

Each exception defines:
- message: human readable message
- code: programmatic error code (e.g. "VALIDATION_ERROR")
- status_code: default HTTP status for the exception
"""


class GlossaryError(Exception):
    """Base exception. Every custom exception inherits from this one."""

    status_code: int = 500

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or "GLOSSARY_ERROR"
        super().__init__(self.message)


class ConfigurationError(GlossaryError):
    """Configuration problem (missing GitHub credentials, bad paths, etc.)."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, "CONFIG_ERROR")


class ValidationError(GlossaryError):
    """Invalid input (missing required field, malformed letter or repo name)."""

    status_code = 400

    def __init__(self, message: str, field: str = None, errors: list = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field
        self.errors = errors


class AuthenticationError(GlossaryError):
    """Missing or invalid admin session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, "UNAUTHORIZED")


class NotFoundError(GlossaryError):
    """Record, file or remote blob not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str = None):
        msg = (
            f"{resource} not found"
            if not identifier
            else f"{resource} '{identifier}' not found"
        )
        super().__init__(msg, "NOT_FOUND")
        self.resource = resource
        self.identifier = identifier


class ConflictError(GlossaryError):
    """Duplicate term on add, or stale revision on a remote write."""

    status_code = 409

    def __init__(self, message: str, identifier: str = None):
        super().__init__(message, "CONFLICT")
        self.identifier = identifier


class UpstreamError(GlossaryError):
    """Remote API answered with an unexpected status or could not be reached."""

    status_code = 500

    def __init__(self, message: str, service: str = None, upstream_status: int = None):
        super().__init__(message, "UPSTREAM_ERROR")
        self.service = service
        self.upstream_status = upstream_status


class ParseError(GlossaryError):
    """A CSV row could not be decoded. Recovered by skipping the row."""

    status_code = 400

    def __init__(self, message: str, line: int = None):
        super().__init__(message, "PARSE_ERROR")
        self.line = line
