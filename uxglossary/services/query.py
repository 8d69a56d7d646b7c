from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from uxglossary.config.constants import CsvConfig
from uxglossary.config.exceptions import ValidationError
from uxglossary.domain.models import GlossaryRecord
from uxglossary.utils.text import collation_key

_LETTER_RE = re.compile(CsvConfig.LETTER_PATTERN)


def group_by_letter(records: Iterable[GlossaryRecord]) -> Dict[str, List[GlossaryRecord]]:
    """Buckets records by group letter; each bucket sorted by term collation."""
    grouped: Dict[str, List[GlossaryRecord]] = {}
    for record in records:
        grouped.setdefault(record.group_letter, []).append(record)
    for items in grouped.values():
        items.sort(key=lambda r: collation_key(r.term))
    return grouped


def flatten(grouped: Dict[str, List[GlossaryRecord]]) -> List[GlossaryRecord]:
    return [record for letter in sorted(grouped) for record in grouped[letter]]


def normalize_letter_param(value: str) -> str:
    """Route parameter to group key ("0-9" -> "0", "a" -> "A")."""
    raw = (value or "").strip()
    letter = CsvConfig.DIGIT_GROUP if raw == CsvConfig.DIGIT_GROUP_PARAM else raw.upper()
    if not _LETTER_RE.match(letter):
        raise ValidationError("Letter must be A-Z or 0-9", field="letter")
    return letter


def items_for_letter(records: Iterable[GlossaryRecord], letter: str) -> List[GlossaryRecord]:
    return group_by_letter(records).get(normalize_letter_param(letter), [])


def search(
    records: Iterable[GlossaryRecord], query: str, min_length: int = 0
) -> List[GlossaryRecord]:
    """
    Linear case-insensitive substring scan over term, definition and acronym.

    Queries shorter than ``min_length`` (after stripping) return nothing; the
    interactive search box uses 2, other callers leave it at 0.
    """
    needle = (query or "").strip().lower()
    if not needle or len(needle) < min_length:
        return []

    return [
        record
        for record in records
        if needle in record.term.lower()
        or needle in record.definition.lower()
        or (record.acronym is not None and needle in record.acronym.lower())
    ]


def find_by_term(records: Iterable[GlossaryRecord], term: str) -> Optional[GlossaryRecord]:
    wanted = (term or "").strip().lower()
    for record in records:
        if record.key == wanted:
            return record
    return None
