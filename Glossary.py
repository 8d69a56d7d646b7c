#!/usr/bin/env python3
"""
UX Glossary - Servidor do glossário
===================================

Entry point da aplicação.
Execute com: python Glossary.py

Arquitetura:
    uxglossary/
    ├── config/         # Settings, constantes, exceções, logging
    ├── domain/         # GlossaryRecord e tipos de resultado
    ├── infrastructure/ # Stores (arquivo local, GitHub Contents API)
    ├── services/       # Merge, consultas, GlossaryService
    ├── presentation/   # Routers e schemas da API
    └── server/         # App FastAPI, dependências, handlers
"""

import os
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def main():
    """
    Configura e inicia o servidor Uvicorn.

    Host e porta vêm de SERVER__HOST / SERVER__PORT (default 127.0.0.1:8000).
    """
    sys.path.append(os.path.dirname(os.path.abspath(__file__)))

    from uxglossary.config.settings import settings

    project_root = os.path.dirname(os.path.abspath(__file__))
    package_dir = os.path.join(project_root, "uxglossary")

    # Pode ser desabilitado com GLOSSARY_RELOAD=0
    reload_enabled = os.getenv("GLOSSARY_RELOAD", "1").lower() not in {"0", "false", "no"}

    print(f"Starting UX Glossary on http://{settings.server.host}:{settings.server.port}")

    uvicorn.run(
        "uxglossary.server.app:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=reload_enabled,
        reload_dirs=[package_dir],
        reload_excludes=[
            ".venv/*",
            ".git/*",
            "data/*",
            "__pycache__/*",
        ],
    )


if __name__ == "__main__":
    main()
