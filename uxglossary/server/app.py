from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from uxglossary.config import GlossaryError, setup_logging
from uxglossary.config.logging_config import server_logger as logger
from uxglossary.config.settings import settings
from uxglossary.server.dependencies import build_glossary_service
from uxglossary.server.error_handlers import generic_exception_handler, glossary_exception_handler

from uxglossary.presentation.routes import admin, glossary, system

"""
Módulo do Servidor (API Handler).

Define a aplicação FastAPI, rotas da API e ciclo de vida do servidor.
Responsável por:
1. Montar o GlossaryService sobre o store configurado (local ou GitHub) no startup.
2. Registrar os routers públicos e administrativos sob /api.
3. Padronizar erros em JSON via exception handlers.
"""

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if getattr(app.state, "glossary_service", None) is None:
        if settings.storage.is_github and not settings.github.is_configured:
            # build_store levanta ConfigurationError logo em seguida
            logger.error("GitHub storage selected but GITHUB__TOKEN/GITHUB__REPO are missing")
        logger.info("Initializing GlossaryService (store=%s)...", settings.storage.backend)
        app.state.glossary_service = build_glossary_service(settings)

    if not settings.auth.admin_password and not settings.auth.admin_token:
        logger.warning("No admin credentials configured; admin endpoints are unreachable")
    if not settings.auth.secret_key:
        logger.warning("AUTH__SECRET_KEY not set; sessions will not survive a restart")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title="UX Glossary API",
    version="1.0",
    lifespan=lifespan
)

# --- Global Exception Handlers ---
app.add_exception_handler(GlossaryError, glossary_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# --- Middleware ---
app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=1)

# CORS Setup
cors_origins = settings.server.cors_allowed_origins or [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

cors_allow_origin_regex = None
if settings.server.env == "development":
    cors_allow_origin_regex = r"^https?://(?:localhost|127\.0\.0\.1|\d{1,3}(?:\.\d{1,3}){3})(?::5173)?$"

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=cors_allow_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(glossary.router, prefix="/api", tags=["Glossary"])
app.include_router(admin.router, prefix="/api", tags=["Admin"])
app.include_router(system.router, prefix="/api", tags=["System"])
