"""Cache de perfis com TTL apoiado em lookup em lote.

Fluxo de `resolve(ids)`:
1. Ids com entrada ainda válida são servidos do cache (sem IO).
2. Os demais vão juntos em UMA chamada ao colaborador de lookup.
3. Cada registro retornado vira uma entrada nova (fetched_at = agora).
4. Falha do lookup é logada e absorvida; ids sem entrada recebem o
   placeholder `id:<id>`.

Entradas expiradas continuam servindo como fallback quando o re-fetch
falha ou não traz o id.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.profile import ProfileSnapshot
from app.observability import record_latency
from config.logging import log_fallback
from config.settings.neynar import DEFAULT_PROFILE_CACHE_TTL_SECONDS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from app.protocols.profile_lookup import ProfileLookupProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Snapshot e instante do fetch (relógio monotônico, segundos)."""

    snapshot: ProfileSnapshot
    fetched_at: float


class ProfileCache:
    """Cache id → ProfileSnapshot com expiração fixa a partir do fetch."""

    def __init__(
        self,
        lookup: ProfileLookupProtocol,
        ttl_seconds: float = DEFAULT_PROFILE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lookup = lookup
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[int, CacheEntry] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.fetched_at <= self._ttl_seconds

    def _stale_ids(self, ids: list[int]) -> list[int]:
        now = self._clock()
        with self._lock:
            return [
                profile_id
                for profile_id in ids
                if (entry := self._entries.get(profile_id)) is None
                or not self._is_fresh(entry, now)
            ]

    async def _fetch(self, ids: list[int]) -> None:
        started_at = time.perf_counter()
        try:
            fetched = await self._lookup.fetch_profiles(ids)
        except Exception as exc:
            log_fallback(
                logger,
                "profile_cache",
                reason=f"lookup_failed:{type(exc).__name__}",
                elapsed_ms=(time.perf_counter() - started_at) * 1000,
            )
            return

        now = self._clock()
        with self._lock:
            for profile_id, snapshot in fetched.items():
                self._entries[profile_id] = CacheEntry(snapshot=snapshot, fetched_at=now)

        record_latency("profile_cache", "lookup", (time.perf_counter() - started_at) * 1000)
        logger.debug(
            "profile_lookup_done",
            extra={"requested": len(ids), "resolved": len(fetched)},
        )

    async def resolve(self, ids: Iterable[int]) -> dict[int, ProfileSnapshot]:
        """Resolve ids em snapshots com no máximo um lookup por chamada.

        Args:
            ids: ids de perfil (duplicatas ignoradas)

        Returns:
            Mapa id → snapshot; ids não resolvidos recebem placeholder.
        """
        unique_ids = list(dict.fromkeys(ids))
        stale = self._stale_ids(unique_ids)
        if stale:
            await self._fetch(stale)

        resolved: dict[int, ProfileSnapshot] = {}
        with self._lock:
            for profile_id in unique_ids:
                entry = self._entries.get(profile_id)
                resolved[profile_id] = (
                    entry.snapshot if entry else ProfileSnapshot.for_unresolved(profile_id)
                )
        return resolved

    def peek(self, profile_id: int) -> CacheEntry | None:
        """Entrada atual (válida ou não), sem IO."""
        with self._lock:
            return self._entries.get(profile_id)
