"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.dedupe import (
    DEFAULT_DEDUPE_CAPACITY,
    DedupeSettings,
    get_dedupe_settings,
)

__all__ = [
    "DEFAULT_DEDUPE_CAPACITY",
    "BaseSettings",
    "DedupeSettings",
    "Environment",
    "get_base_settings",
    "get_dedupe_settings",
]
