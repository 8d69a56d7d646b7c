"""
Constantes centralizadas do UX Glossary.
Todos os magic numbers e strings hardcoded devem ser definidos aqui.
"""


class CsvConfig:
    """Formato do documento CSV do glossário."""

    HEADER = 'letter,"term","definition",acronym'
    SEE_ALSO_COLUMN = "seeAlso"
    # Formatos aceitos pelo upload (comparação em lowercase)
    ACCEPTED_HEADERS = (
        'letter,"term","definition",acronym',
        "letter,term,definition,acronym",
        '"letter","term","definition","acronym"',
    )
    LETTER_PATTERN = r"^[A-Z0]$"
    DIGIT_GROUP = "0"
    DIGIT_GROUP_PARAM = "0-9"
    BACKUP_SUFFIX = ".backup-"
    ENCODING = "utf-8"


class SearchConfig:
    """Configurações de busca."""

    MAX_QUERY_LENGTH = 200  # Tamanho máximo da query
    INTERACTIVE_MIN_QUERY_LENGTH = 2  # Busca interativa ignora queries menores


class UploadConfig:
    """Configurações do upload de CSV."""

    MAX_REPORTED_ERRORS = 5  # Erros de linha exibidos na resposta
    ALLOWED_EXTENSION = ".csv"
    FORM_FIELD = "csv"


class GitHubConfig:
    """Contents API do GitHub."""

    API_URL = "https://api.github.com"
    ACCEPT = "application/vnd.github.v3+json"
    USER_AGENT = "UX-Glossary-Admin"
    DEFAULT_BRANCH = "main"
    DEFAULT_PATH = "data/glossary.csv"
    REPO_PATTERN = r"^[a-zA-Z0-9_.-]+/[a-zA-Z0-9_.-]+$"
    TIMEOUT_SECONDS = 10.0
    # Status que a Contents API usa para sha desatualizado ou ausente
    CONFLICT_STATUSES = (409, 422)


class AuthConfig:
    """Sessão administrativa."""

    COOKIE_NAME = "admin_session"
    ADMIN_TOKEN_HEADER = "X-Admin-Token"
    JWT_ALGORITHM = "HS256"
    SESSION_SUBJECT = "admin"
    SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 7  # 1 semana
