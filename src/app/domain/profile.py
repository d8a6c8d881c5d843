"""Snapshot imutável do perfil público de uma identidade Farcaster.

Um snapshot novo substitui o anterior; nunca é mutado.
"""

from __future__ import annotations

from dataclasses import dataclass

# Campos canônicos comparados no diff, na ordem de exibição
CANONICAL_PROFILE_FIELDS: tuple[str, ...] = (
    "name",
    "display_name",
    "bio",
    "avatar_ref",
    "location",
    "website",
)

PROFILE_FIELD_LABELS: dict[str, str] = {
    "name": "NAME",
    "display_name": "DISPLAY NAME",
    "bio": "BIO",
    "avatar_ref": "AVATAR",
    "location": "LOCATION",
    "website": "WEBSITE",
}


@dataclass(frozen=True, slots=True)
class ProfileSnapshot:
    """Visão pontual do perfil público.

    Attributes:
        name: username (handle) sem "@"
        display_name: nome de exibição
        bio: texto da bio
        avatar_ref: URL do avatar (pfp)
        location: descrição da localização
        website: URL pessoal
        placeholder: True quando sintetizado para um id não resolvido;
            não participa de comparações
    """

    name: str | None = None
    display_name: str | None = None
    bio: str | None = None
    avatar_ref: str | None = None
    location: str | None = None
    website: str | None = None
    placeholder: bool = False

    @classmethod
    def for_unresolved(cls, profile_id: int) -> ProfileSnapshot:
        """Snapshot placeholder `id:<id>` para ids sem lookup."""
        label = f"id:{profile_id}"
        return cls(name=label, display_name=label, placeholder=True)

    def is_empty(self) -> bool:
        """True se nenhum campo canônico tem valor."""
        return all(getattr(self, name) in (None, "") for name in CANONICAL_PROFILE_FIELDS)

    def value_of(self, field_name: str) -> str | None:
        """Valor de um campo canônico (vazio normalizado para None)."""
        value = getattr(self, field_name)
        return value or None
