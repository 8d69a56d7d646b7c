from __future__ import annotations

import ipaddress
import time
from dataclasses import dataclass
from typing import Any, Optional

import jwt
from fastapi import Request

from uxglossary.config.constants import AuthConfig
from uxglossary.config.settings import get_session_secret, settings


@dataclass(frozen=True)
class AdminSession:
    """Capability handed to protected operations by ``require_admin``."""

    subject: str
    method: str  # "cookie" | "token"
    expires_at: Optional[int] = None


def create_session_token(now: Optional[float] = None) -> str:
    issued_at = int(now if now is not None else time.time())
    payload = {
        "sub": AuthConfig.SESSION_SUBJECT,
        "iat": issued_at,
        "exp": issued_at + settings.auth.session_max_age_seconds,
    }
    return jwt.encode(payload, get_session_secret(), algorithm=AuthConfig.JWT_ALGORITHM)


def decode_session_token(token: Optional[str]) -> Optional[dict[str, Any]]:
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            get_session_secret(),
            algorithms=[AuthConfig.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError:
        return None
    if payload.get("sub") != AuthConfig.SESSION_SUBJECT:
        return None
    return payload


def _load_trusted_proxy_networks() -> list[Any]:
    raw_values = list(settings.security.trusted_proxy_ips or [])
    if settings.server.env == "development":
        raw_values.extend(["127.0.0.1/32", "::1/128"])

    networks: list[Any] = []
    for raw in raw_values:
        value = str(raw or "").strip()
        if not value:
            continue
        try:
            if "/" in value:
                networks.append(ipaddress.ip_network(value, strict=False))
            else:
                ip = ipaddress.ip_address(value)
                suffix = "/32" if ip.version == 4 else "/128"
                networks.append(ipaddress.ip_network(f"{value}{suffix}", strict=False))
        except ValueError:
            continue
    return networks


def _is_trusted_proxy(ip_text: str | None) -> bool:
    if not ip_text:
        return False
    try:
        ip = ipaddress.ip_address(ip_text)
    except ValueError:
        return False
    return any(ip in network for network in _load_trusted_proxy_networks())


def extract_client_ip(request: Request) -> str:
    direct_ip = request.client.host if request.client and request.client.host else None
    forwarded_for = request.headers.get("X-Forwarded-For", "").strip()

    # We only trust X-Forwarded-For when the immediate peer is a trusted proxy.
    if forwarded_for and _is_trusted_proxy(direct_ip):
        first_hop = forwarded_for.split(",", 1)[0].strip()
        try:
            ipaddress.ip_address(first_hop)
            return first_hop
        except ValueError:
            pass

    return direct_ip or "unknown"
