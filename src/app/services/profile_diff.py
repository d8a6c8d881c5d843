"""Diff de perfil para eventos `user.updated`.

Resolução em três níveis, com a origem de cada lado explícita:

1. `before`/`after` do payload (não vazios) têm prioridade.
2. Sem `before`: último snapshot conhecido do id (baseline sem TTL).
3. Sem `after`: resolução pelo ProfileCache; placeholder conta como não
   resolvido.

Quando o payload não traz before/after mas lista os campos alterados, o
diff vira uma linha por campo com o valor atual. Sem nenhuma linha, o
resultado é a linha genérica `NO_CHANGES_LINE`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from app.domain.profile import CANONICAL_PROFILE_FIELDS, PROFILE_FIELD_LABELS
from app.services.message_formatter import escape_html, truncate

if TYPE_CHECKING:
    from app.domain.profile import ProfileSnapshot
    from app.protocols.models import ProfileUpdateEvent
    from app.protocols.profile_lookup import ProfileResolverProtocol, SnapshotStoreProtocol

logger = logging.getLogger(__name__)

DIFF_VALUE_MAX_CHARS = 160
EMPTY_VALUE = "(empty)"
NO_CHANGES_LINE = "Profile updated (no field-level changes detected)"


class SnapshotSource(str, Enum):
    """De onde veio cada lado do diff."""

    PAYLOAD = "payload"
    LAST_KNOWN = "last_known"
    LOOKUP = "lookup"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ProfileDiff:
    """Resultado do diff.

    Attributes:
        profile_id: id do perfil
        lines: linhas de mudança (já escapadas), nunca vazio
        old_source: origem do snapshot antigo
        new_source: origem do snapshot novo
        new_snapshot: snapshot novo resolvido (None se não resolvido)
    """

    profile_id: int
    lines: tuple[str, ...]
    old_source: SnapshotSource
    new_source: SnapshotSource
    new_snapshot: ProfileSnapshot | None = None

    @property
    def has_changes(self) -> bool:
        return self.lines != (NO_CHANGES_LINE,)


def _display_value(value: str | None, max_chars: int) -> str:
    if not value:
        return EMPTY_VALUE
    return escape_html(truncate(value, max_chars))


def _usable(snapshot: ProfileSnapshot | None) -> ProfileSnapshot | None:
    if snapshot is None or snapshot.placeholder or snapshot.is_empty():
        return None
    return snapshot


def change_lines(
    old: ProfileSnapshot,
    new: ProfileSnapshot,
    max_chars: int = DIFF_VALUE_MAX_CHARS,
) -> list[str]:
    """`LABEL: antigo → novo` para cada campo canônico diferente."""
    lines: list[str] = []
    for field_name in CANONICAL_PROFILE_FIELDS:
        old_value = old.value_of(field_name)
        new_value = new.value_of(field_name)
        if old_value == new_value:
            continue
        label = PROFILE_FIELD_LABELS[field_name]
        lines.append(
            f"{label}: {_display_value(old_value, max_chars)} → "
            f"{_display_value(new_value, max_chars)}"
        )
    return lines


def field_name_lines(
    field_names: tuple[str, ...],
    current: ProfileSnapshot | None,
    max_chars: int = DIFF_VALUE_MAX_CHARS,
) -> list[str]:
    """`LABEL: atual` por campo listado; nomes fora do conjunto canônico são ignorados."""
    lines: list[str] = []
    for field_name in dict.fromkeys(field_names):
        label = PROFILE_FIELD_LABELS.get(field_name)
        if label is None:
            continue
        value = current.value_of(field_name) if current else None
        lines.append(f"{label}: {_display_value(value, max_chars)}")
    return lines


class ProfileDiffEngine:
    """Calcula o diff e mantém o baseline por id."""

    def __init__(
        self,
        profile_cache: ProfileResolverProtocol,
        snapshot_store: SnapshotStoreProtocol,
        max_value_chars: int = DIFF_VALUE_MAX_CHARS,
    ) -> None:
        self._profile_cache = profile_cache
        self._snapshot_store = snapshot_store
        self._max_value_chars = max_value_chars

    def _resolve_old(self, event: ProfileUpdateEvent) -> tuple[ProfileSnapshot | None, SnapshotSource]:
        if (before := _usable(event.before)) is not None:
            return before, SnapshotSource.PAYLOAD
        if (last_known := _usable(self._snapshot_store.get(event.id))) is not None:
            return last_known, SnapshotSource.LAST_KNOWN
        return None, SnapshotSource.NONE

    async def _resolve_new(
        self, event: ProfileUpdateEvent
    ) -> tuple[ProfileSnapshot | None, SnapshotSource]:
        if (after := _usable(event.after)) is not None:
            return after, SnapshotSource.PAYLOAD
        resolved = await self._profile_cache.resolve([event.id])
        if (looked_up := _usable(resolved.get(event.id))) is not None:
            return looked_up, SnapshotSource.LOOKUP
        return None, SnapshotSource.NONE

    async def resolve_snapshots(
        self, event: ProfileUpdateEvent
    ) -> tuple[ProfileSnapshot | None, SnapshotSource, ProfileSnapshot | None, SnapshotSource]:
        """(old, old_source, new, new_source) sem gravar nada."""
        old, old_source = self._resolve_old(event)
        new, new_source = await self._resolve_new(event)
        return old, old_source, new, new_source

    async def diff(self, event: ProfileUpdateEvent) -> ProfileDiff:
        """Calcula as linhas de mudança e atualiza o baseline do id.

        Args:
            event: evento de edição de perfil normalizado

        Returns:
            ProfileDiff com ao menos uma linha.
        """
        old, old_source, new, new_source = await self.resolve_snapshots(event)

        payload_has_structure = event.before is not None or event.after is not None
        lines: list[str] = []
        if not payload_has_structure and event.updated_field_names:
            lines = field_name_lines(event.updated_field_names, new, self._max_value_chars)
        elif old is not None and new is not None:
            lines = change_lines(old, new, self._max_value_chars)

        if new is not None:
            self._snapshot_store.put(event.id, new)

        logger.debug(
            "profile_diff_computed",
            extra={
                "profile_id": event.id,
                "old_source": old_source.value,
                "new_source": new_source.value,
                "changed_lines": len(lines),
            },
        )
        return ProfileDiff(
            profile_id=event.id,
            lines=tuple(lines) or (NO_CHANGES_LINE,),
            old_source=old_source,
            new_source=new_source,
            new_snapshot=new,
        )
