import time

from fastapi import APIRouter, Request

from uxglossary.config.exceptions import GlossaryError

router = APIRouter()


@router.get("/status")
async def get_status(request: Request):
    """
    Healthcheck e Status do Sistema.

    Verifica se o store configurado (arquivo local ou GitHub) responde e
    quantos registros o documento tem.
    """
    service = getattr(request.app.state, "glossary_service", None)
    if service is None:
        return {"status": "error", "error": "Glossary service unavailable"}

    start = time.perf_counter()
    try:
        store = await service.status()
        overall = "online"
    except GlossaryError as e:
        store = {"store": getattr(service.store, "name", "unknown"), "error": e.message}
        overall = "error"
    latency_ms = round((time.perf_counter() - start) * 1000, 2)

    return {
        "status": overall,
        "version": getattr(request.app, "version", "unknown"),
        "backend": "FastAPI",
        "glossary": {**store, "latency_ms": latency_ms},
    }
