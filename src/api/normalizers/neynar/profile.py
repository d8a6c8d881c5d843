"""Conversão de objetos de usuário Neynar em ProfileSnapshot.

Usado tanto para `before`/`after` embutidos no webhook `user.updated`
quanto para os registros do lookup em lote (`user/bulk`). Os dois lados
usam as mesmas regras para que o diff nunca compare nomes diferentes do
mesmo campo.
"""

from __future__ import annotations

from typing import Any

from app.domain.profile import CANONICAL_PROFILE_FIELDS, ProfileSnapshot

from ._coercion import coerce_text
from .rules import FieldRule, extract, path


def _location_text(obj: Any) -> str | None:
    """Localização como texto: string direta ou endereço estruturado."""
    location = obj.get("location")
    if location is None and isinstance(obj.get("profile"), dict):
        location = obj["profile"].get("location")
    if isinstance(location, str):
        return location
    if not isinstance(location, dict):
        return None
    if isinstance(location.get("description"), str):
        return location["description"]
    address = location.get("address")
    if not isinstance(address, dict):
        return None
    parts = [
        address.get(key) for key in ("city", "state", "country") if isinstance(address.get(key), str)
    ]
    return ", ".join(part for part in parts if part) or None


SNAPSHOT_RULES: dict[str, tuple[FieldRule, ...]] = {
    "name": (path("username"), path("name")),
    "display_name": (path("display_name"), path("displayName")),
    "bio": (path("profile", "bio", "text"), path("bio", "text"), path("bio")),
    "avatar_ref": (
        path("pfp_url"),
        path("pfpUrl"),
        path("pfp", "url"),
        path("avatar_url"),
        path("avatar_ref"),
        path("avatarRef"),
    ),
    "location": (_location_text,),
    "website": (path("website"), path("url"), path("profile", "website"), path("profile", "url")),
}

# Nomes de campo usados pelo provedor em `updated_fields` → campo canônico
FIELD_NAME_ALIASES: dict[str, str] = {
    "username": "name",
    "name": "name",
    "display_name": "display_name",
    "displayname": "display_name",
    "bio": "bio",
    "pfp": "avatar_ref",
    "pfp_url": "avatar_ref",
    "pfpurl": "avatar_ref",
    "avatar": "avatar_ref",
    "avatar_ref": "avatar_ref",
    "avatarref": "avatar_ref",
    "location": "location",
    "website": "website",
    "url": "website",
}


def snapshot_from_mapping(obj: Any) -> ProfileSnapshot | None:
    """Monta snapshot a partir de um objeto de usuário.

    Returns:
        Snapshot, ou None se `obj` não for objeto ou não tiver nenhum
        campo canônico preenchido.
    """
    if not isinstance(obj, dict):
        return None
    values = {
        field_name: extract(obj, SNAPSHOT_RULES[field_name], coerce_text)
        for field_name in CANONICAL_PROFILE_FIELDS
    }
    snapshot = ProfileSnapshot(**values)
    return None if snapshot.is_empty() else snapshot


def canonical_field_name(raw_name: str) -> str:
    """Nome canônico para um nome de campo do provedor.

    Nomes desconhecidos voltam normalizados (lower/strip) para exibição.
    """
    key = raw_name.strip().lower()
    return FIELD_NAME_ALIASES.get(key, key)
