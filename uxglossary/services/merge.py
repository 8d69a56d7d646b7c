"""
Merge/upsert engine.

Pure functions over record lists: every admin mutation is
read-everything → mutate in memory → write-everything, and this module is
the "mutate" step. Uniqueness key is the lowercased term.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from uxglossary.config.exceptions import ConflictError, NotFoundError
from uxglossary.domain.models import GlossaryRecord, UpsertResult


def upsert_batch(
    existing: Iterable[GlossaryRecord],
    incoming: Iterable[GlossaryRecord],
) -> UpsertResult:
    """
    Bulk reconciliation used by the CSV upload.

    Incoming records replace existing ones with the same term (case-insensitive)
    and are otherwise inserted, in input order. Result order is not significant.
    """
    by_term: Dict[str, GlossaryRecord] = {}
    for record in existing:
        by_term[record.key] = record

    added = 0
    updated = 0
    for record in incoming:
        if record.key in by_term:
            updated += 1
        else:
            added += 1
        by_term[record.key] = record

    return UpsertResult(records=list(by_term.values()), added=added, updated=updated)


def find_index(records: List[GlossaryRecord], term: str) -> int:
    wanted = term.strip().lower()
    for index, record in enumerate(records):
        if record.key == wanted:
            return index
    return -1


def add_record(
    existing: Iterable[GlossaryRecord], record: GlossaryRecord
) -> List[GlossaryRecord]:
    """Single add: unlike the bulk upload, an existing term is an error."""
    existing = list(existing)
    if find_index(existing, record.term) != -1:
        raise ConflictError(f"Term '{record.term}' already exists", identifier=record.term)
    return upsert_batch(existing, [record]).records


def _locate_for_edit(
    records: List[GlossaryRecord],
    record: GlossaryRecord,
    original_term: Optional[str],
) -> int:
    if original_term:
        for index, current in enumerate(records):
            if current.term == original_term:
                return index
        index = find_index(records, original_term)
        if index != -1:
            return index

    # Sem originalTerm: casa pelo term atual, preferindo a mesma letter
    for index, current in enumerate(records):
        if current.term == record.term and current.letter == record.letter:
            return index
    for index, current in enumerate(records):
        if current.term == record.term:
            return index
    return find_index(records, record.term)


def edit_record(
    existing: Iterable[GlossaryRecord],
    record: GlossaryRecord,
    original_term: Optional[str] = None,
) -> Tuple[List[GlossaryRecord], GlossaryRecord]:
    """
    Replaces a record in place. ``original_term`` identifies the target so
    the term itself can be renamed. Returns (records, previous record).
    """
    records = list(existing)
    index = _locate_for_edit(records, record, original_term)
    if index == -1:
        raise NotFoundError("Term", original_term or record.term)

    previous = records[index]
    # Rename só pode cair num term livre
    if record.key != previous.key and find_index(records, record.term) != -1:
        raise ConflictError(f"Term '{record.term}' already exists", identifier=record.term)

    records[index] = record
    return records, previous


def delete_record(
    existing: Iterable[GlossaryRecord], term: str
) -> Tuple[List[GlossaryRecord], GlossaryRecord]:
    records = list(existing)
    index = find_index(records, term)
    if index == -1:
        raise NotFoundError("Term", term)
    deleted = records.pop(index)
    return records, deleted


def _duplicate_key(record: GlossaryRecord) -> str:
    return f"{record.letter}:{record.key}"


def find_duplicates(records: Iterable[GlossaryRecord]) -> Dict[str, List[GlossaryRecord]]:
    """Groups records that share letter + lowercased term (only groups with 2+)."""
    seen: Dict[str, List[GlossaryRecord]] = {}
    for record in records:
        seen.setdefault(_duplicate_key(record), []).append(record)
    return {key: items for key, items in seen.items() if len(items) > 1}


def dedupe(records: Iterable[GlossaryRecord]) -> List[GlossaryRecord]:
    """Keeps the first occurrence of each duplicate group."""
    kept: Dict[str, GlossaryRecord] = {}
    for record in records:
        kept.setdefault(_duplicate_key(record), record)
    return list(kept.values())
