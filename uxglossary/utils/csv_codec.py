"""
Codec do documento CSV do glossário.

Dialeto: cabeçalho ``letter,"term","definition",acronym`` seguido de uma
linha por registro. ``term`` e ``definition`` são sempre entre aspas
(``"`` escapado como ``""``); ``letter`` nunca; ``acronym`` e o quinto campo
opcional ``seeAlso`` só quando contêm vírgula, aspas ou quebra de linha.

Linhas inválidas nunca abortam o decode: viram ``RowError`` em
``DecodeResult.errors`` e um warning no log.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from uxglossary.config.constants import CsvConfig
from uxglossary.config.exceptions import ParseError
from uxglossary.config.logging_config import codec_logger as logger
from uxglossary.domain.models import DecodeResult, GlossaryRecord, RowError

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def _finish_field(chars: List[str], quoted: bool) -> str:
    value = "".join(chars).strip()
    if not quoted and len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return value


def _scan_row(lines: List[str], start: int) -> Tuple[List[str], int]:
    """
    Scans one logical row beginning at physical line ``start``.

    A row continues onto the next physical line only while a quoted field is
    open. Returns the fields and the index of the next unread line.
    """
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    quoted = False
    continued = False
    index = start
    raw = lines[index]

    while True:
        # CR final de CRLF sai do fim da linha; dentro de aspas volta no join
        crlf = raw.endswith("\r")
        line = raw[:-1] if crlf else raw
        i = 0
        n = len(line)
        while i < n:
            char = line[i]
            if char == '"':
                if in_quotes and i + 1 < n and line[i + 1] == '"':
                    current.append('"')
                    i += 2
                    continue
                in_quotes = not in_quotes
                quoted = True
                if continued and not in_quotes:
                    following = line[i + 1] if i + 1 < n else ""
                    if following not in ("", ","):
                        raise ParseError("Malformed quoted field", line=start + 1)
            elif char == "," and not in_quotes:
                values.append(_finish_field(current, quoted))
                current = []
                quoted = False
            else:
                current.append(char)
            i += 1

        if not in_quotes:
            break
        index += 1
        if index >= len(lines):
            raise ParseError("Unterminated quoted field", line=start + 1)
        continued = True
        if crlf:
            current.append("\r")
        current.append("\n")
        raw = lines[index]

    values.append(_finish_field(current, quoted))
    return values, index + 1


def parse_line(line: str) -> List[str]:
    """Splits a single physical row into fields."""
    values, _ = _scan_row([line], 0)
    return values


def _field(values: List[str], position: int) -> Optional[str]:
    if position < len(values):
        return values[position] or None
    return None


def _to_record(values: List[str], line_number: int) -> GlossaryRecord:
    if len(values) < 3 or not (values[0] and values[1] and values[2]):
        raise ParseError("Letter, term, and definition are required", line=line_number)

    letter = values[0].upper()
    try:
        return GlossaryRecord(
            letter=letter,
            term=values[1],
            definition=values[2],
            acronym=_field(values, 3),
            see_also=_field(values, 4),
        )
    except PydanticValidationError as e:
        first = e.errors()[0]
        if "letter" in first.get("loc", ()):
            raise ParseError("Letter must be A-Z or 0", line=line_number) from e
        raise ParseError(f"Invalid row ({first.get('msg')})", line=line_number) from e


def _split_lines(text: str) -> List[str]:
    text = (text or "").lstrip("\ufeff")
    lines = text.split("\n")
    # Leading blank lines do not count as the header
    while lines and not lines[0].strip():
        lines.pop(0)
    return lines


def decode_with_errors(text: str) -> DecodeResult:
    """Decodes a document, collecting one ``RowError`` per rejected row."""
    result = DecodeResult()
    lines = _split_lines(text)

    index = 1  # header discarded unconditionally
    while index < len(lines):
        if not lines[index].strip():
            index += 1
            continue

        line_number = index + 1
        try:
            values, next_index = _scan_row(lines, index)
        except ParseError as e:
            logger.warning("Skipping line %s: %s", line_number, e.message)
            result.errors.append(RowError(line_number, e.message))
            index += 1
            continue

        try:
            result.records.append(_to_record(values, line_number))
        except ParseError as e:
            logger.warning("Skipping line %s: %s", line_number, e.message)
            result.errors.append(RowError(line_number, e.message))
        index = next_index

    return result


def decode(text: str) -> List[GlossaryRecord]:
    return decode_with_errors(text).records


def is_valid_header(line: str) -> bool:
    """Soft format check used by the upload entry point."""
    header = (line or "").strip().lower()
    if any(header.startswith(fmt) for fmt in CsvConfig.ACCEPTED_HEADERS):
        return True
    return '"term"' in header and '"definition"' in header


def first_line(text: str) -> str:
    lines = _split_lines(text)
    return lines[0].rstrip("\r") if lines else ""


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _quote_if_needed(value: str) -> str:
    if any(token in value for token in _NEEDS_QUOTES):
        return _quote(value)
    return value


def encode(records: Iterable[GlossaryRecord]) -> str:
    """Serializes records in the given order (callers sort beforehand)."""
    records = list(records)
    with_see_also = any(record.see_also for record in records)

    header = CsvConfig.HEADER
    if with_see_also:
        header += "," + CsvConfig.SEE_ALSO_COLUMN

    rows = [header]
    for record in records:
        fields = [
            record.letter,
            _quote(record.term),
            _quote(record.definition),
            _quote_if_needed(record.acronym or ""),
        ]
        if with_see_also:
            fields.append(_quote_if_needed(record.see_also or ""))
        rows.append(",".join(fields))

    return "\n".join(rows) + "\n"
