"""
Teste de conectividade com o GitHub para a tela de setup do admin.

Executa, em ordem, as verificações que a persistência remota precisa:
token válido, acesso ao repositório (com permissão de escrita), branch
existente e presença do arquivo do glossário. Para na primeira falha e
devolve sugestões legíveis.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from uxglossary.config.exceptions import ConfigurationError, UpstreamError, ValidationError
from uxglossary.config.logging_config import get_logger
from uxglossary.infrastructure.github_client import GitHubContentsClient, is_valid_repo_name

logger = get_logger("diagnostics")

TOKEN_URL = "https://github.com/settings/tokens/new"


def _failure(error: str, suggestions: list[str], tests: Optional[dict] = None) -> dict[str, Any]:
    return {
        "success": False,
        "error": error,
        "suggestions": suggestions,
        "tests": tests or {},
        "username": None,
    }


async def check_github_connection(
    token: Optional[str],
    repo: Optional[str],
    branch: str = "main",
    path: str = "data/glossary.csv",
    *,
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    if not token or not repo:
        return _failure(
            "Missing GitHub token or repository",
            ["Please provide both GitHub token and repository name"],
        )
    if not is_valid_repo_name(repo):
        return _failure(
            "Invalid repository format",
            [
                "Repository should be in format: username/repository-name",
                "Example: johndoe/my-glossary-app",
                "Make sure there are no spaces or special characters",
            ],
        )

    kwargs: dict[str, Any] = {"transport": transport}
    if api_url:
        kwargs["api_url"] = api_url
    if timeout:
        kwargs["timeout"] = timeout
    try:
        client = GitHubContentsClient(token, repo, branch, **kwargs)
    except (ConfigurationError, ValidationError) as e:
        return _failure(e.message, [])

    tests: dict[str, Any] = {}
    suggestions: list[str] = []
    logger.info("Testing GitHub connection (repo=%s, branch=%s)", repo, client.branch)

    try:
        user_response = await client.get_user()
        if not user_response.is_success:
            tests["userAccess"] = {"success": False, "error": user_response.text}
            if user_response.status_code == 401:
                suggestions += [
                    "GitHub token is invalid or expired",
                    f"Create a new token at: {TOKEN_URL}",
                    "Make sure the token has 'repo' scope for private repos or 'public_repo' for public repos",
                ]
            elif user_response.status_code == 403:
                suggestions += [
                    "GitHub token permissions are insufficient",
                    "Check that your token has 'repo' (private) or 'public_repo' (public) scope",
                ]
            return _failure(
                f"GitHub token authentication failed ({user_response.status_code})",
                suggestions,
                tests,
            )
        username = user_response.json().get("login")
        tests["userAccess"] = {"success": True, "username": username}

        repo_response = await client.get_repo()
        if not repo_response.is_success:
            tests["repoAccess"] = {"success": False, "error": repo_response.text}
            if repo_response.status_code == 404:
                suggestions += [
                    f"Repository '{repo}' not found",
                    "Check that the repository name is correct (username/repo-name)",
                    "For private repos, ensure your token has access",
                ]
            elif repo_response.status_code == 403:
                suggestions += [
                    "Access forbidden: the token lacks permissions for this repository",
                    f"Create a token with 'repo' scope at: {TOKEN_URL}",
                ]
            return _failure(
                f"Repository access failed ({repo_response.status_code})", suggestions, tests
            )
        repo_data = repo_response.json()
        permissions = repo_data.get("permissions") or {}
        tests["repoAccess"] = {
            "success": True,
            "name": repo_data.get("name"),
            "private": repo_data.get("private"),
            "permissions": permissions,
        }
        if not permissions.get("push"):
            suggestions += [
                "Warning: token may not have write access to this repository",
                "Make sure your token has 'repo' scope for full access",
            ]

        branch_response = await client.get_branch()
        if not branch_response.is_success:
            tests["branchAccess"] = {"success": False, "error": branch_response.text}
            return _failure(
                f"Branch '{client.branch}' not found ({branch_response.status_code})",
                suggestions + [f"Create the branch '{client.branch}' or set GITHUB__BRANCH"],
                tests,
            )
        tests["branchAccess"] = {"success": True, "branch": client.branch}

        file_payload = await client.get_file(path)
        tests["fileAccess"] = {
            "success": True,
            "exists": file_payload is not None,
            "sha": file_payload.get("sha") if file_payload else None,
        }
        if file_payload is None:
            suggestions.append(f"'{path}' does not exist yet; it will be created on the first save")
    except UpstreamError as e:
        return _failure(
            e.message,
            suggestions + ["Check your internet connection", "Verify GitHub is accessible"],
            tests,
        )

    return {
        "success": True,
        "error": None,
        "suggestions": suggestions,
        "tests": tests,
        "username": username,
    }
