"""
Modelos de domínio do UX Glossary.
Define as estruturas de dados utilizadas em toda a aplicação.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from uxglossary.config.constants import CsvConfig
from uxglossary.utils.text import collation_key, derive_letter

_LETTER_RE = re.compile(CsvConfig.LETTER_PATTERN)


class GlossaryRecord(BaseModel):
    """
    Uma entrada do glossário.

    Attributes:
        letter: "A".."Z" ou "0" (termos que começam com dígito/símbolo)
        term: Chave natural, única sem diferenciar maiúsculas
        definition: Texto da definição
        acronym: Sigla opcional
        see_also: Referência cruzada opcional (``seeAlso`` no JSON/CSV)
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    letter: str = ""
    term: str = Field(min_length=1)
    definition: str = Field(min_length=1)
    acronym: Optional[str] = None
    see_also: Optional[str] = Field(default=None, alias="seeAlso")

    @field_validator("term", "definition", mode="before")
    @classmethod
    def strip_required(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("acronym", "see_also", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_letter(cls, data):
        # Letter derived from the term when not supplied explicitly
        if isinstance(data, dict) and not str(data.get("letter") or "").strip():
            term = data.get("term")
            if isinstance(term, str) and term.strip():
                data = {**data, "letter": derive_letter(term.strip())}
        return data

    @field_validator("letter", mode="before")
    @classmethod
    def normalize_letter(cls, v):
        if v is None:
            return ""
        return str(v).strip().upper()

    @field_validator("letter")
    @classmethod
    def check_letter(cls, v: str) -> str:
        if not _LETTER_RE.match(v):
            raise ValueError("letter must be A-Z or 0")
        return v

    @property
    def key(self) -> str:
        """Chave de unicidade (term em lowercase)."""
        return self.term.lower()

    @property
    def group_letter(self) -> str:
        """Grupo de exibição: termos iniciados por dígito vão para "0"."""
        if self.term[:1].isdigit():
            return CsvConfig.DIGIT_GROUP
        return self.letter

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass
class RowError:
    """Linha do CSV descartada durante o decode."""

    line: int
    message: str

    def __str__(self) -> str:
        return f"Line {self.line}: {self.message}"


@dataclass
class DecodeResult:
    records: List[GlossaryRecord] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


@dataclass
class StoreSnapshot:
    """Coleção completa lida de um store, com o token de revisão (se houver)."""

    records: List[GlossaryRecord] = field(default_factory=list)
    revision: Optional[str] = None
    exists: bool = False


@dataclass
class UpsertResult:
    records: List[GlossaryRecord]
    added: int = 0
    updated: int = 0


def sort_records(records: Iterable[GlossaryRecord]) -> List[GlossaryRecord]:
    """Ordem de persistência: letter, depois term (collation)."""
    return sorted(records, key=lambda r: (r.letter, collation_key(r.term)))
