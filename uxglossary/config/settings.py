import json
import os
import secrets
from typing import List, Literal, Optional, Set

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from uxglossary.config.constants import AuthConfig, CsvConfig, GitHubConfig

# Root path resolving
PROJECT_ROOT = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)


class ServerSettings(BaseModel):
    port: int = 8000
    host: str = "127.0.0.1"
    env: str = "development"
    cors_allowed_origins: List[str] = Field(default_factory=list)


class StorageSettings(BaseModel):
    """Where the glossary document lives."""

    backend: Literal["local", "github"] = "local"
    data_dir: str = "data"
    filename: str = "glossary.csv"
    # Serve built-in sample terms while the document does not exist yet
    sample_data_fallback: bool = False

    @property
    def is_github(self) -> bool:
        return self.backend == "github"

    @property
    def csv_path(self) -> str:
        """Returns the CSV path (relative to root if not absolute)."""
        data_dir = self.data_dir
        if not os.path.isabs(data_dir):
            data_dir = os.path.join(PROJECT_ROOT, data_dir)
        return os.path.join(data_dir, self.filename)


class GitHubSettings(BaseModel):
    token: str = ""
    repo: str = ""  # owner/repository
    branch: str = GitHubConfig.DEFAULT_BRANCH
    path: str = GitHubConfig.DEFAULT_PATH
    api_url: str = GitHubConfig.API_URL
    timeout_seconds: float = GitHubConfig.TIMEOUT_SECONDS
    user_agent: str = GitHubConfig.USER_AGENT

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.repo)


class AuthSettings(BaseModel):
    # Valores devem vir de env/JSON. Evita credenciais hardcoded.
    admin_password: str = ""
    admin_password_previous: str = ""
    admin_token: str = ""
    admin_token_previous: str = ""
    secret_key: str = ""
    session_max_age_seconds: int = AuthConfig.SESSION_MAX_AGE_SECONDS
    cookie_name: str = AuthConfig.COOKIE_NAME


class SecuritySettings(BaseModel):
    """Security and anti-abuse controls."""

    login_attempts_per_minute: int = 5
    trusted_proxy_ips: List[str] = Field(default_factory=list)


class AppSettings(BaseSettings):
    """
    Main Application Configuration.
    Reads from environment variables and/or settings.json
    """

    server: ServerSettings = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @property
    def csv_path(self) -> str:
        return self.storage.csv_path

    @property
    def port(self) -> int:
        return self.server.port

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def load(cls) -> "AppSettings":
        """
        Loads configuration prioritizing:
        1. Environment Variables
        2. settings.json
        3. Defaults
        """
        config_path = os.path.join(PROJECT_ROOT, "uxglossary", "config", "settings.json")
        json_data = {}

        if os.path.exists(config_path):
            try:
                with open(config_path, "r", encoding=CsvConfig.ENCODING) as f:
                    json_data = json.load(f)
            except Exception as e:
                print(f"⚠️ Failed to load settings.json: {e}")

        # Pydantic handles merging: passed kwargs > env vars > defaults
        return cls(**json_data)


# Singleton instance
settings = AppSettings.load()

# Sessions signed with a per-process key when none is configured
_ephemeral_secret = secrets.token_urlsafe(32)


def _get_model_fields(model: BaseModel) -> Set[str]:
    model_fields = getattr(type(model), "model_fields", None)
    if isinstance(model_fields, dict):
        return set(model_fields.keys())
    return set(getattr(model, "__fields__", {}).keys())


def reload_settings() -> "AppSettings":
    """
    Reloads settings from env/settings.json into the existing instance.
    Keeps references stable for modules that imported `settings`.
    """
    new_settings = AppSettings.load()
    for field_name in _get_model_fields(new_settings):
        setattr(settings, field_name, getattr(new_settings, field_name))
    return settings


def get_session_secret() -> str:
    return settings.auth.secret_key or _ephemeral_secret


def _matches(value: str, expected: str) -> bool:
    # compare_digest só aceita str ASCII; bytes cobre senhas com acento
    return bool(expected) and secrets.compare_digest(value.encode("utf-8"), expected.encode("utf-8"))


def is_valid_admin_token(token: Optional[str]) -> bool:
    if not token:
        return False
    current = settings.auth.admin_token
    previous = settings.auth.admin_token_previous
    if _matches(token, current):
        return True
    if _matches(token, previous):
        return True
    return False


def is_valid_admin_password(password: Optional[str]) -> bool:
    if not password:
        return False
    current = settings.auth.admin_password
    previous = settings.auth.admin_password_previous
    if _matches(password, current):
        return True
    if _matches(password, previous):
        return True
    return False
