from fastapi import Request

from uxglossary.config.constants import AuthConfig
from uxglossary.config.exceptions import AuthenticationError
from uxglossary.config.settings import AppSettings, is_valid_admin_token, settings
from uxglossary.infrastructure import GitHubContentsClient, LocalRecordStore, RemoteRecordStore
from uxglossary.services import GlossaryService
from uxglossary.utils.auth import AdminSession, decode_session_token


def build_store(app_settings: AppSettings):
    """Store configurado: arquivo CSV local ou GitHub Contents API."""
    if app_settings.storage.is_github:
        client = GitHubContentsClient.from_settings(app_settings.github)
        return RemoteRecordStore(client, app_settings.github.path)
    return LocalRecordStore(app_settings.csv_path)


def build_glossary_service(app_settings: AppSettings) -> GlossaryService:
    return GlossaryService(
        build_store(app_settings),
        sample_data_fallback=app_settings.storage.sample_data_fallback,
    )


async def get_glossary_service(request: Request) -> GlossaryService:
    """
    Dependency to get the GlossaryService instance from app state.
    """
    return request.app.state.glossary_service


async def require_admin(request: Request) -> AdminSession:
    """
    Dependency that gates admin operations.

    Accepts the session cookie issued by /admin/login or, for automation,
    the X-Admin-Token header.
    """
    if is_valid_admin_token(request.headers.get(AuthConfig.ADMIN_TOKEN_HEADER)):
        return AdminSession(subject=AuthConfig.SESSION_SUBJECT, method="token")

    payload = decode_session_token(request.cookies.get(settings.auth.cookie_name))
    if payload is None:
        raise AuthenticationError()
    return AdminSession(
        subject=payload["sub"], method="cookie", expires_at=payload.get("exp")
    )
