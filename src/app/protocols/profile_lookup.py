"""Protocolos de identidade: lookup em lote, cache e snapshots conhecidos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from app.domain.profile import ProfileSnapshot


class ProfileLookupProtocol(Protocol):
    """Colaborador externo de lookup de perfis (uma chamada por lote).

    Pode levantar em falha de rede/HTTP; resultados parciais são válidos.
    """

    async def fetch_profiles(self, ids: Sequence[int]) -> dict[int, ProfileSnapshot]: ...


class ProfileResolverProtocol(Protocol):
    """Resolução de ids em snapshots (com placeholder para não resolvidos)."""

    async def resolve(self, ids: Iterable[int]) -> dict[int, ProfileSnapshot]: ...


class SnapshotStoreProtocol(Protocol):
    """Último snapshot observado por id (baseline do diff, sem TTL)."""

    def get(self, profile_id: int) -> ProfileSnapshot | None: ...

    def put(self, profile_id: int, snapshot: ProfileSnapshot) -> None: ...
