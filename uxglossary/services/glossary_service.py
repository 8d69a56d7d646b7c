"""
Service do glossário: orquestra store, merge e consultas.

Cada mutação segue o ciclo ler-tudo → alterar em memória → gravar-tudo sobre
o store configurado (arquivo local ou GitHub). Camada intermediária entre
routers e stores, responsável pelas regras de domínio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from uxglossary.config.constants import SearchConfig, UploadConfig
from uxglossary.config.exceptions import NotFoundError, ValidationError
from uxglossary.config.logging_config import service_logger as logger
from uxglossary.data.sample_glossary import SAMPLE_RECORDS
from uxglossary.domain.models import GlossaryRecord, StoreSnapshot, sort_records
from uxglossary.services import merge, query
from uxglossary.utils import csv_codec


class RecordStore(Protocol):
    name: str

    async def load_all(self) -> StoreSnapshot: ...

    async def save_all(self, records, revision=None, message=None) -> Optional[str]: ...

    def last_modified(self) -> Optional[datetime]: ...


@dataclass
class UploadReport:
    processed: int
    added: int
    updated: int
    errors: List[str] = field(default_factory=list)
    error_count: int = 0


def summarize_errors(errors: List, limit: int = UploadConfig.MAX_REPORTED_ERRORS) -> List[str]:
    """First ``limit`` messages plus a "... and K more errors" line."""
    messages = [str(e) for e in errors]
    if len(messages) <= limit:
        return messages
    return messages[:limit] + [f"... and {len(messages) - limit} more errors"]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class GlossaryService:
    def __init__(
        self,
        store: RecordStore,
        *,
        sample_data_fallback: bool = False,
        started_at: Optional[datetime] = None,
    ):
        self.store = store
        self.sample_data_fallback = sample_data_fallback
        self.started_at = started_at or datetime.now(timezone.utc)

    # ─── Leitura ────────────────────────────────────────────────────────

    async def _records_for_reading(self) -> List[GlossaryRecord]:
        snapshot = await self.store.load_all()
        if not snapshot.exists and self.sample_data_fallback:
            logger.info("Glossary document missing; serving sample data")
            return list(SAMPLE_RECORDS)
        return snapshot.records

    async def grouped(self) -> dict[str, List[GlossaryRecord]]:
        return query.group_by_letter(await self._records_for_reading())

    async def list_all(self) -> List[GlossaryRecord]:
        return query.flatten(await self.grouped())

    async def list_by_letter(self, letter: str) -> List[GlossaryRecord]:
        return query.items_for_letter(await self._records_for_reading(), letter)

    async def search(self, q: str, interactive: bool = False) -> List[GlossaryRecord]:
        if len(q or "") > SearchConfig.MAX_QUERY_LENGTH:
            raise ValidationError(
                f"Query too long (max {SearchConfig.MAX_QUERY_LENGTH} characters)",
                field="q",
            )
        min_length = SearchConfig.INTERACTIVE_MIN_QUERY_LENGTH if interactive else 0
        results = query.search(await self._records_for_reading(), q, min_length=min_length)
        return query.flatten(query.group_by_letter(results))

    # ─── Mutações (admin) ───────────────────────────────────────────────

    async def add_term(self, record: GlossaryRecord) -> GlossaryRecord:
        snapshot = await self.store.load_all()
        records = merge.add_record(snapshot.records, record)
        await self.store.save_all(
            records, snapshot.revision, message=f"Add term: {record.term}"
        )
        logger.info("Term added: %s (letter=%s)", record.term, record.letter)
        return record

    async def edit_term(
        self, record: GlossaryRecord, original_term: Optional[str] = None
    ) -> GlossaryRecord:
        snapshot = await self.store.load_all()
        records, previous = merge.edit_record(snapshot.records, record, original_term)
        await self.store.save_all(
            records, snapshot.revision, message=f"Update term: {record.term}"
        )
        if previous.term != record.term:
            logger.info("Term renamed: %s -> %s", previous.term, record.term)
        else:
            logger.info("Term updated: %s", record.term)
        return record

    async def delete_term(self, term: str) -> GlossaryRecord:
        if not (term or "").strip():
            raise ValidationError("Term name is required", field="term")
        snapshot = await self.store.load_all()
        records, deleted = merge.delete_record(snapshot.records, term)
        await self.store.save_all(
            records, snapshot.revision, message=f"Delete term: {deleted.term}"
        )
        logger.info("Term deleted: %s", deleted.term)
        return deleted

    async def upload_csv(self, text: str) -> UploadReport:
        """Bulk upsert from an uploaded document. Existing terms are always replaced."""
        lines = [line for line in (text or "").strip().split("\n") if line.strip()]
        if len(lines) < 2:
            raise ValidationError(
                "CSV file must have at least a header and one data row", field="csv"
            )
        if not csv_codec.is_valid_header(csv_codec.first_line(text)):
            raise ValidationError(
                'CSV header must be in format: letter,"term","definition",acronym',
                field="csv",
            )

        decoded = csv_codec.decode_with_errors(text)
        errors = summarize_errors(decoded.errors)
        if not decoded.records:
            raise ValidationError("No valid terms found in CSV", field="csv", errors=errors)

        snapshot = await self.store.load_all()
        result = merge.upsert_batch(snapshot.records, decoded.records)
        await self.store.save_all(
            result.records,
            snapshot.revision,
            message=f"Bulk update glossary via CSV upload: {_utc_now_iso()}",
        )
        logger.info(
            "CSV upload: %s processed, %s added, %s updated, %s rejected rows",
            len(decoded.records),
            result.added,
            result.updated,
            len(decoded.errors),
        )
        return UploadReport(
            processed=len(decoded.records),
            added=result.added,
            updated=result.updated,
            errors=errors,
            error_count=len(decoded.errors),
        )

    # ─── Export / metadados ─────────────────────────────────────────────

    async def export_csv(self) -> str:
        snapshot = await self.store.load_all()
        if not snapshot.exists:
            raise NotFoundError("Glossary file")
        return csv_codec.encode(sort_records(snapshot.records))

    def last_updated(self) -> datetime:
        """Later of the process start time and the document's modification time."""
        modified = self.store.last_modified()
        if modified and modified > self.started_at:
            return modified
        return self.started_at

    async def status(self) -> dict:
        snapshot = await self.store.load_all()
        return {
            "store": self.store.name,
            "exists": snapshot.exists,
            "records": len(snapshot.records),
            "revision": snapshot.revision,
        }
