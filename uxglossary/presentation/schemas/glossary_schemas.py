"""
Schemas Pydantic para a API do glossário.

Separados do modelo de domínio: os payloads aceitam campos ausentes para que
a validação devolva 400 com mensagem legível (e não 422 genérico).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from uxglossary.config.exceptions import ValidationError
from uxglossary.domain.models import GlossaryRecord


class TermIn(BaseModel):
    """Payload de criação (POST /api/admin/terms)."""

    model_config = ConfigDict(populate_by_name=True)

    letter: Optional[str] = None
    term: Optional[str] = None
    definition: Optional[str] = None
    acronym: Optional[str] = None
    see_also: Optional[str] = Field(default=None, alias="seeAlso")

    def to_record(self) -> GlossaryRecord:
        if not (self.term or "").strip() or not (self.definition or "").strip():
            raise ValidationError("Term and definition are required", field="term")
        try:
            return GlossaryRecord(
                letter=self.letter,
                term=self.term,
                definition=self.definition,
                acronym=self.acronym,
                see_also=self.see_also,
            )
        except PydanticValidationError as e:
            raise ValidationError("Letter must be A-Z or 0", field="letter") from e


class TermUpdateIn(TermIn):
    """Payload de edição (PUT /api/admin/terms). ``originalTerm`` permite renomear."""

    original_term: Optional[str] = Field(default=None, alias="originalTerm")


class TermDeleteIn(BaseModel):
    term: Optional[str] = None


class LoginIn(BaseModel):
    password: Optional[str] = None


class GitHubTestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    github_token: Optional[str] = Field(default=None, alias="githubToken")
    github_repo: Optional[str] = Field(default=None, alias="githubRepo")
    github_branch: Optional[str] = Field(default=None, alias="githubBranch")


class UploadOut(BaseModel):
    success: bool = True
    message: str
    added: int
    updated: int
    errors: Optional[List[str]] = None
    error_count: int = Field(default=0, serialization_alias="errorCount")
