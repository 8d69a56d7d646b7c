"""
Exception Handlers globais para o FastAPI.

Centraliza o tratamento de todas as exceções GlossaryError e erros genéricos,
garantindo respostas JSON padronizadas e evitando vazamento de stack traces.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from uxglossary.config.exceptions import GlossaryError
from uxglossary.config.logging_config import server_logger as logger

_DETAIL_ATTRS = (
    "field",
    "errors",
    "resource",
    "identifier",
    "service",
    "upstream_status",
    "line",
)


async def glossary_exception_handler(request: Request, exc: GlossaryError) -> JSONResponse:
    """
    Handler global para todas as exceções GlossaryError e subclasses.

    Converte exceções tipadas em respostas JSON padronizadas com:
    - success: false
    - error.code: Código programático (ex: "VALIDATION_ERROR")
    - error.message: Mensagem legível para o usuário
    - error.details: Informações adicionais (opcional)
    """
    status_code = getattr(exc, 'status_code', 500)

    if status_code >= 500:
        logger.error(f"[{exc.code}] {exc.message} - Path: {request.url.path}")
    else:
        logger.warning(f"[{exc.code}] {exc.message} - Path: {request.url.path}")

    details = {}
    for attr in _DETAIL_ATTRS:
        if getattr(exc, attr, None) is not None:
            details[attr] = getattr(exc, attr)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": details if details else None
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler de fallback para exceções não tratadas.

    Captura qualquer Exception não prevista e retorna uma resposta genérica
    sem vazar detalhes internos (stack traces, paths, etc.).
    """
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "Internal server error. Please try again.",
                "details": None
            }
        }
    )
