"""Public config package exports."""

from .constants import AuthConfig as AuthConfig
from .constants import CsvConfig as CsvConfig
from .constants import GitHubConfig as GitHubConfig
from .constants import SearchConfig as SearchConfig
from .constants import UploadConfig as UploadConfig
from .exceptions import AuthenticationError as AuthenticationError
from .exceptions import ConfigurationError as ConfigurationError
from .exceptions import ConflictError as ConflictError
from .exceptions import GlossaryError as GlossaryError
from .exceptions import NotFoundError as NotFoundError
from .exceptions import ParseError as ParseError
from .exceptions import UpstreamError as UpstreamError
from .exceptions import ValidationError as ValidationError
from .logging_config import get_logger as get_logger
from .logging_config import setup_logging as setup_logging

__all__ = [
    "AuthConfig",
    "CsvConfig",
    "GitHubConfig",
    "SearchConfig",
    "UploadConfig",
    "GlossaryError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
    "ParseError",
    "setup_logging",
    "get_logger",
]
