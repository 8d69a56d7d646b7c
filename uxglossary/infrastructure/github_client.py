"""
Cliente mínimo da GitHub Contents API.

Trata um caminho do repositório como um blob versionado: GET devolve
``{content: base64, sha}`` e PUT aceita ``{message, content, branch, sha?}``.
O ``sha`` funciona como token de revisão para escrita condicional.
"""

from __future__ import annotations

import re
from typing import Any, Optional

import httpx

from uxglossary.config.constants import GitHubConfig
from uxglossary.config.exceptions import (
    ConfigurationError,
    ConflictError,
    UpstreamError,
    ValidationError,
)
from uxglossary.config.logging_config import store_logger as logger

_REPO_RE = re.compile(GitHubConfig.REPO_PATTERN)


def is_valid_repo_name(repo: Optional[str]) -> bool:
    return bool(repo) and _REPO_RE.match(repo) is not None


class GitHubContentsClient:
    def __init__(
        self,
        token: str,
        repo: str,
        branch: str = GitHubConfig.DEFAULT_BRANCH,
        *,
        api_url: str = GitHubConfig.API_URL,
        timeout: float = GitHubConfig.TIMEOUT_SECONDS,
        user_agent: str = GitHubConfig.USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not token or not repo:
            raise ConfigurationError("GitHub configuration missing (token and repo are required)")
        if not is_valid_repo_name(repo):
            raise ValidationError(
                "Repository must be in format: owner/repository-name", field="repo"
            )
        self.token = token
        self.repo = repo
        self.branch = branch or GitHubConfig.DEFAULT_BRANCH
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    @classmethod
    def from_settings(cls, github_settings, transport=None) -> "GitHubContentsClient":
        return cls(
            github_settings.token,
            github_settings.repo,
            github_settings.branch,
            api_url=github_settings.api_url,
            timeout=github_settings.timeout_seconds,
            user_agent=github_settings.user_agent,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
            "Accept": GitHubConfig.ACCEPT,
        }

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Raw call; network failures and timeouts become ``UpstreamError``."""
        try:
            async with httpx.AsyncClient(
                base_url=self.api_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("GitHub request %s %s failed: %s", method, path, e)
            raise UpstreamError(
                f"Failed to connect to GitHub API: {e}", service="github"
            ) from e

    def _contents_path(self, path: str) -> str:
        return f"/repos/{self.repo}/contents/{path.lstrip('/')}"

    async def get_file(self, path: str) -> Optional[dict]:
        """Returns the Contents API payload, or None when the file does not exist."""
        response = await self.request(
            "GET", self._contents_path(path), params={"ref": self.branch}
        )
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise UpstreamError(
                f"GitHub API error: {response.status_code}",
                service="github",
                upstream_status=response.status_code,
            )
        return response.json()

    async def put_file(
        self,
        path: str,
        content_b64: str,
        message: str,
        sha: Optional[str] = None,
    ) -> dict:
        body: dict[str, Any] = {
            "message": message,
            "content": content_b64,
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        response = await self.request("PUT", self._contents_path(path), json=body)
        if response.status_code in GitHubConfig.CONFLICT_STATUSES:
            raise ConflictError(
                "Remote glossary changed since it was read; reload and retry",
                identifier=path,
            )
        if not response.is_success:
            raise UpstreamError(
                f"GitHub API error: {response.status_code} - {response.text}",
                service="github",
                upstream_status=response.status_code,
            )
        return response.json()

    async def get_user(self) -> httpx.Response:
        return await self.request("GET", "/user")

    async def get_repo(self) -> httpx.Response:
        return await self.request("GET", f"/repos/{self.repo}")

    async def get_branch(self) -> httpx.Response:
        return await self.request("GET", f"/repos/{self.repo}/branches/{self.branch}")
