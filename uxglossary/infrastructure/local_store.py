"""
Store local: o glossário inteiro num único arquivo CSV.

Cada escrita regrava o documento completo, depois de copiar a versão
anterior para ``<arquivo>.backup-<epochMillis>``. Não há lock nem detecção
de conflito: duas requisições concorrentes podem se sobrescrever (a última
escrita vence). O backup preserva o estado anterior para recuperação manual.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import time
from datetime import datetime, timezone
from typing import Iterable, Optional

from uxglossary.config.constants import CsvConfig
from uxglossary.config.logging_config import store_logger as logger
from uxglossary.domain.models import GlossaryRecord, StoreSnapshot, sort_records
from uxglossary.utils import csv_codec


class LocalRecordStore:
    name = "local"

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> StoreSnapshot:
        if not os.path.exists(self.path):
            logger.info("Glossary file not found at %s", self.path)
            return StoreSnapshot()

        with open(self.path, "r", encoding=CsvConfig.ENCODING) as f:
            content = f.read()

        records = csv_codec.decode(content)
        logger.debug("Loaded %s records from %s", len(records), self.path)
        return StoreSnapshot(records=records, revision=None, exists=True)

    def backup_path(self, millis: int) -> str:
        return f"{self.path}{CsvConfig.BACKUP_SUFFIX}{millis}"

    def _write(self, records: list[GlossaryRecord]) -> Optional[str]:
        content = csv_codec.encode(sort_records(records))

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        backup = None
        if os.path.exists(self.path):
            backup = self.backup_path(int(time.time() * 1000))
            shutil.copyfile(self.path, backup)
            logger.info("Backup written to %s", backup)

        with open(self.path, "w", encoding=CsvConfig.ENCODING, newline="") as f:
            f.write(content)

        logger.info("Saved %s records to %s", len(records), self.path)
        return backup

    async def load_all(self) -> StoreSnapshot:
        return await asyncio.to_thread(self._read)

    async def save_all(
        self,
        records: Iterable[GlossaryRecord],
        revision: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Optional[str]:
        """
        Rewrites the whole document.

        ``revision`` and ``message`` are accepted for interface parity with the
        remote store and ignored: local writes have no conflict detection.
        """
        await asyncio.to_thread(self._write, list(records))
        return None

    def last_modified(self) -> Optional[datetime]:
        try:
            mtime = os.path.getmtime(self.path)
        except OSError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)
