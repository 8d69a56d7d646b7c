from .glossary_service import GlossaryService as GlossaryService
from .glossary_service import UploadReport as UploadReport

__all__ = ["GlossaryService", "UploadReport"]
