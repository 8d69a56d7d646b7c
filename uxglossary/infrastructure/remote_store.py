"""
Store remoto: o mesmo documento CSV guardado num repositório GitHub.

``load_all`` devolve os registros e o ``sha`` lido; ``save_all`` envia o
documento completo condicionado a esse ``sha``. Se outra escrita aconteceu
no meio, a API rejeita e levantamos ``ConflictError``. Não há retry
automático: quem chama deve recarregar e tentar de novo.
"""

from __future__ import annotations

import base64
import binascii
from datetime import datetime, timezone
from typing import Iterable, Optional

from uxglossary.config.constants import CsvConfig
from uxglossary.config.exceptions import UpstreamError
from uxglossary.config.logging_config import store_logger as logger
from uxglossary.domain.models import GlossaryRecord, StoreSnapshot, sort_records
from uxglossary.infrastructure.github_client import GitHubContentsClient
from uxglossary.utils import csv_codec


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode(CsvConfig.ENCODING)).decode("ascii")


def decode_content(content_b64: str) -> str:
    # A Contents API quebra o base64 em linhas de 60 caracteres
    return base64.b64decode("".join(content_b64.split())).decode(CsvConfig.ENCODING)


class RemoteRecordStore:
    name = "github"

    def __init__(self, client: GitHubContentsClient, path: str):
        self.client = client
        self.path = path

    async def load_all(self) -> StoreSnapshot:
        payload = await self.client.get_file(self.path)
        if payload is None:
            logger.info("No remote glossary yet at %s@%s", self.path, self.client.branch)
            return StoreSnapshot()

        try:
            text = decode_content(payload.get("content") or "")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise UpstreamError(
                f"GitHub returned undecodable content for {self.path}", service="github"
            ) from e

        records = csv_codec.decode(text)
        logger.debug("Loaded %s records from GitHub (sha=%s)", len(records), payload.get("sha"))
        return StoreSnapshot(records=records, revision=payload.get("sha"), exists=True)

    async def save_all(
        self,
        records: Iterable[GlossaryRecord],
        revision: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Optional[str]:
        """
        Writes the whole document and returns the new revision token.

        Without ``revision`` the write only succeeds when the file does not
        exist remotely yet.
        """
        records = sort_records(records)
        content = encode_content(csv_codec.encode(records))
        message = message or f"Update glossary: {datetime.now(timezone.utc).isoformat()}"

        payload = await self.client.put_file(self.path, content, message, sha=revision)
        new_revision = (payload.get("content") or {}).get("sha")
        logger.info(
            "Saved %s records to GitHub %s@%s (sha=%s)",
            len(records),
            self.path,
            self.client.branch,
            new_revision,
        )
        return new_revision

    def last_modified(self) -> Optional[datetime]:
        return None
