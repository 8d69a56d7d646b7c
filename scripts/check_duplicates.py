#!/usr/bin/env python3
"""
Verifica termos duplicados (mesma letter + term sem diferenciar caixa) no
documento do glossário configurado.

Uso:
    python scripts/check_duplicates.py          # apenas relata
    python scripts/check_duplicates.py --fix    # mantém a primeira ocorrência e grava
    python scripts/check_duplicates.py --file data/glossary.csv
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from uxglossary.config import setup_logging  # noqa: E402
from uxglossary.config.settings import settings  # noqa: E402
from uxglossary.infrastructure import LocalRecordStore  # noqa: E402
from uxglossary.server.dependencies import build_store  # noqa: E402
from uxglossary.services.merge import dedupe, find_duplicates  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report (and optionally remove) duplicate glossary terms.")
    parser.add_argument("--file", help="CSV local a verificar (default: store configurado)")
    parser.add_argument("--fix", action="store_true", help="Remove duplicatas mantendo a primeira ocorrência")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    store = LocalRecordStore(args.file) if args.file else build_store(settings)
    snapshot = await store.load_all()
    if not snapshot.exists:
        print(f"⚠️ Documento do glossário não encontrado (store={store.name}).")
        return 1

    duplicates = find_duplicates(snapshot.records)
    print(f"Total de termos: {len(snapshot.records)}")
    if not duplicates:
        print("✅ Nenhuma duplicata encontrada.")
        return 0

    print(f"Duplicatas encontradas: {len(duplicates)}")
    for key, items in sorted(duplicates.items()):
        print(f"  {key}: {len(items)} ocorrências")
        for record in items:
            print(f"    - {record.term!r}: {record.definition[:60]}")

    if not args.fix:
        print("\nExecute com --fix para manter apenas a primeira ocorrência.")
        return 1

    cleaned = dedupe(snapshot.records)
    await store.save_all(
        cleaned,
        snapshot.revision,
        message=f"Remove {len(snapshot.records) - len(cleaned)} duplicate terms",
    )
    print(f"✅ {len(snapshot.records) - len(cleaned)} duplicatas removidas. Restam {len(cleaned)} termos.")
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
