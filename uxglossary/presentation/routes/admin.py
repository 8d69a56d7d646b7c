"""
Endpoints administrativos: login, CRUD de termos, upload/download de CSV
e teste de conectividade com o GitHub.

Operações protegidas recebem a capability ``AdminSession`` via
``Depends(require_admin)``; nenhum handler verifica cookie por conta própria.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from starlette.responses import Response

from uxglossary.config.constants import UploadConfig
from uxglossary.config.exceptions import AuthenticationError, ValidationError
from uxglossary.config.logging_config import get_logger
from uxglossary.config.settings import is_valid_admin_password, settings
from uxglossary.presentation.schemas.glossary_schemas import (
    GitHubTestIn,
    LoginIn,
    TermDeleteIn,
    TermIn,
    TermUpdateIn,
    UploadOut,
)
from uxglossary.server.dependencies import get_glossary_service, require_admin
from uxglossary.server.rate_limit import login_rate_limiter
from uxglossary.services import GlossaryService
from uxglossary.services.github_diagnostics import check_github_connection
from uxglossary.utils.auth import AdminSession, create_session_token, extract_client_ip

logger = get_logger("routes.admin")

router = APIRouter()

Service = Annotated[GlossaryService, Depends(get_glossary_service)]
Admin = Annotated[AdminSession, Depends(require_admin)]


# ─── Sessão ────────────────────────────────────────────────────────────────


@router.post(
    "/admin/login",
    responses={
        401: {"description": "Invalid password."},
        429: {"description": "Too many login attempts from this client."},
    },
)
async def login(payload: LoginIn, request: Request):
    client_ip = extract_client_ip(request)
    allowed, retry_after = await login_rate_limiter.consume(
        key=f"login:ip:{client_ip}",
        limit=settings.security.login_attempts_per_minute,
    )
    if not allowed:
        raise HTTPException(
            status_code=429,
            detail="Too many login attempts. Try again later.",
            headers={"Retry-After": str(retry_after)},
        )

    if not settings.auth.admin_password:
        logger.warning("Login attempted but AUTH__ADMIN_PASSWORD is not configured")
    if not is_valid_admin_password(payload.password):
        logger.warning("Failed admin login from %s", client_ip)
        raise AuthenticationError("Invalid password")

    response = JSONResponse({"success": True})
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=create_session_token(),
        max_age=settings.auth.session_max_age_seconds,
        httponly=True,
        secure=settings.server.env == "production",
        samesite="strict",
        path="/",
    )
    logger.info("Admin login from %s", client_ip)
    return response


@router.post("/admin/logout")
async def logout():
    response = JSONResponse({"success": True})
    response.delete_cookie(settings.auth.cookie_name, path="/")
    return response


@router.get("/admin/check-auth")
async def check_auth(request: Request):
    try:
        await require_admin(request)
    except AuthenticationError:
        return JSONResponse({"authenticated": False}, status_code=401)
    return {"authenticated": True}


# ─── Termos ────────────────────────────────────────────────────────────────


@router.post("/admin/terms")
async def add_term(payload: TermIn, service: Service, session: Admin):
    """[Admin] Adiciona um termo; termo já existente (sem diferenciar caixa) → 409."""
    record = await service.add_term(payload.to_record())
    return {"success": True, "term": record.to_api()}


@router.put("/admin/terms")
async def update_term(payload: TermUpdateIn, service: Service, session: Admin):
    """[Admin] Edita um termo localizado por ``originalTerm`` (ou pelo term atual)."""
    record = await service.edit_term(payload.to_record(), payload.original_term)
    return {"success": True, "term": record.to_api()}


@router.delete("/admin/terms")
async def delete_term(payload: TermDeleteIn, service: Service, session: Admin):
    """[Admin] Remove um termo (match sem diferenciar caixa)."""
    deleted = await service.delete_term(payload.term or "")
    return {"success": True, "deletedTerm": deleted.to_api()}


# ─── CSV ───────────────────────────────────────────────────────────────────


@router.post("/admin/upload-csv")
async def upload_csv(
    service: Service,
    session: Admin,
    csv: Optional[UploadFile] = File(None),
):
    """[Admin] Upsert em lote a partir de um arquivo CSV."""
    if csv is None:
        raise ValidationError("No file provided", field=UploadConfig.FORM_FIELD)
    if not (csv.filename or "").lower().endswith(UploadConfig.ALLOWED_EXTENSION):
        raise ValidationError("File must be a CSV", field=UploadConfig.FORM_FIELD)

    raw = await csv.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationError("CSV file must be UTF-8 encoded", field=UploadConfig.FORM_FIELD) from e

    report = await service.upload_csv(text)
    out = UploadOut(
        message=f"Successfully processed {report.processed} terms from CSV",
        added=report.added,
        updated=report.updated,
        errors=report.errors or None,
        error_count=report.error_count,
    )
    return out.model_dump(by_alias=True, exclude_none=True)


@router.get("/download-glossary")
async def download_glossary(service: Service, session: Admin):
    """[Admin] Documento CSV completo como anexo."""
    content = await service.export_csv()
    filename = f"ux-glossary-{datetime.now(timezone.utc).date().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ─── GitHub ────────────────────────────────────────────────────────────────


@router.post("/admin/test-github")
async def test_github(payload: GitHubTestIn, session: Admin):
    """[Admin] Diagnóstico da conexão com o GitHub (defaults vindos das settings)."""
    return await check_github_connection(
        payload.github_token or settings.github.token,
        payload.github_repo or settings.github.repo,
        payload.github_branch or settings.github.branch,
        settings.github.path,
        api_url=settings.github.api_url,
        timeout=settings.github.timeout_seconds,
    )
