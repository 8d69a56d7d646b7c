from typing import Iterable, Optional

import orjson as _orjson
from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from uxglossary.config.exceptions import ValidationError
from uxglossary.config.logging_config import server_logger as logger
from uxglossary.domain.models import GlossaryRecord
from uxglossary.server.dependencies import get_glossary_service
from uxglossary.services import GlossaryService

router = APIRouter()

_LIST_HEADERS = {"Cache-Control": "no-store"}


def _records_response(records: Iterable[GlossaryRecord]) -> Response:
    """Lista de registros pré-serializada com orjson."""
    body = _orjson.dumps([record.to_api() for record in records])
    return Response(content=body, media_type="application/json", headers=_LIST_HEADERS)


def format_display_date(value) -> str:
    """ex: 2025-06-04 -> "4 June 2025"."""
    return f"{value.day} {value.strftime('%B %Y')}"


@router.get("/glossary")
async def list_glossary(service: GlossaryService = Depends(get_glossary_service)):
    """Todos os registros, lista plana ordenada por letra e termo."""
    return _records_response(await service.list_all())


@router.get("/glossary/search")
async def search_glossary(
    q: Optional[str] = Query(None, description="Texto buscado em term, definition e acronym"),
    service: GlossaryService = Depends(get_glossary_service),
):
    if not q:
        raise ValidationError("Query parameter 'q' is required", field="q")

    safe_q = q.replace("\r", "\\r").replace("\n", "\\n")
    logger.debug("Busca: '%s'", safe_q)
    return _records_response(await service.search(q))


@router.get("/glossary/letter/{letter}")
async def glossary_by_letter(
    letter: str,
    service: GlossaryService = Depends(get_glossary_service),
):
    """Registros de uma letra; "0-9" seleciona o grupo de dígitos/símbolos."""
    return _records_response(await service.list_by_letter(letter))


@router.get("/glossary/last-updated")
async def last_updated(service: GlossaryService = Depends(get_glossary_service)):
    moment = service.last_updated()
    return {"lastUpdated": format_display_date(moment), "iso": moment.isoformat()}
