"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.dispatcher import NotificationDispatcher
from app.services.profile_diff import ProfileDiff, ProfileDiffEngine, SnapshotSource

__all__ = [
    "NotificationDispatcher",
    "ProfileDiff",
    "ProfileDiffEngine",
    "SnapshotSource",
]
