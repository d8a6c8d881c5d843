"""Stores em memória do processo.

Estado vive apenas enquanto o processo vive: reinício zera a janela de
dedupe e os snapshots conhecidos. Limitação aceita (sem persistência de
histórico).

Cada store protege suas mutações com lock próprio para continuar correto
sob servidor multi-thread.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from app.protocols.dedupe import IdempotencyProtocol
from config.settings import DEFAULT_DEDUPE_CAPACITY

if TYPE_CHECKING:
    from app.domain.profile import ProfileSnapshot


class MemoryIdempotencyStore(IdempotencyProtocol):
    """Janela de dedupe limitada, em ordem de inserção.

    Ao exceder a capacidade remove o id inserido há mais tempo (FIFO);
    consultas não alteram a ordem.
    """

    def __init__(self, capacity: int = DEFAULT_DEDUPE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity deve ser > 0")
        self._capacity = capacity
        self._seen: dict[str, None] = {}  # dict preserva ordem de inserção
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def seen_before(self, event_id: str | None) -> bool:
        """Verifica e registra o id (sync, atômico)."""
        if not event_id:
            return False
        with self._lock:
            if event_id in self._seen:
                return True  # Duplicado
            self._seen[event_id] = None
            if len(self._seen) > self._capacity:
                oldest = next(iter(self._seen))
                del self._seen[oldest]
            return False  # Novo

    def __contains__(self, event_id: object) -> bool:
        with self._lock:
            return event_id in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


class MemorySnapshotStore:
    """Último snapshot de perfil observado por id (sem TTL)."""

    def __init__(self) -> None:
        self._snapshots: dict[int, ProfileSnapshot] = {}
        self._lock = threading.Lock()

    def get(self, profile_id: int) -> ProfileSnapshot | None:
        with self._lock:
            return self._snapshots.get(profile_id)

    def put(self, profile_id: int, snapshot: ProfileSnapshot) -> None:
        """Substitui o snapshot anterior (snapshots são imutáveis)."""
        with self._lock:
            self._snapshots[profile_id] = snapshot

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)
