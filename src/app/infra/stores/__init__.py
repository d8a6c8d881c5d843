"""Stores do processo: dedupe, snapshots conhecidos e cache de perfis."""

from app.infra.stores.memory_stores import MemoryIdempotencyStore, MemorySnapshotStore
from app.infra.stores.profile_cache import CacheEntry, ProfileCache

__all__ = [
    "CacheEntry",
    "MemoryIdempotencyStore",
    "MemorySnapshotStore",
    "ProfileCache",
]
