"""
Limite de tentativas de login do admin.

Cada IP de cliente tem uma janela deslizante de 60s em memória; o route de
login consome uma tentativa por requisição, antes de checar a senha.
O estado é por processo: com vários workers cada um conta o seu.
"""

from __future__ import annotations

import asyncio
from collections import deque
from math import ceil
import time


class SlidingWindowRateLimiter:
    """Conta tentativas por chave (ex.: ``login:ip:<ip>``) dentro da janela."""

    def __init__(self, window_seconds: int = 60):
        self.window_seconds = window_seconds
        self._attempts: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()
        self._pruned_at = 0.0

    def _prune_idle_clients(self, cutoff: float, now: float) -> None:
        # No máximo uma varredura por janela
        if now - self._pruned_at < self.window_seconds:
            return
        idle = [key for key, attempts in self._attempts.items() if not attempts or attempts[-1] <= cutoff]
        for key in idle:
            del self._attempts[key]
        self._pruned_at = now

    async def consume(self, key: str, limit: int) -> tuple[bool, int]:
        """
        Registra uma tentativa de login para ``key``.

        Returns:
            (allowed, retry_after_seconds); quando bloqueado, o segundo valor
            vai no header Retry-After da resposta 429.
        """
        now = time.monotonic()
        cutoff = now - self.window_seconds

        async with self._lock:
            self._prune_idle_clients(cutoff, now)
            attempts = self._attempts.setdefault(key, deque())

            while attempts and attempts[0] <= cutoff:
                attempts.popleft()

            if len(attempts) >= limit:
                oldest = attempts[0]
                return False, max(1, ceil(self.window_seconds - (now - oldest)))

            attempts.append(now)
            return True, 0

    def reset(self) -> None:
        """Esquece todas as tentativas (usado pelos testes)."""
        self._attempts.clear()
        self._pruned_at = 0.0


login_rate_limiter = SlidingWindowRateLimiter(window_seconds=60)
