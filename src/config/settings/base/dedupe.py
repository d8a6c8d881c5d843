"""Settings de dedupe/idempotência de entregas.

A janela de dedupe vive em memória: reinício do processo zera o registro
e uma reentrega do provedor após o restart volta a ser processada.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DEDUPE_CAPACITY = 5000


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações da janela de dedupe.

    Attributes:
        capacity: Máximo de event ids lembrados (FIFO ao exceder)
    """

    capacity: int = DEFAULT_DEDUPE_CAPACITY

    def validate(self) -> list[str]:
        """Valida configurações de dedupe."""
        errors: list[str] = []
        if self.capacity <= 0:
            errors.append("DEDUPE_CAPACITY deve ser > 0")
        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    return DedupeSettings(
        capacity=int(os.getenv("DEDUPE_CAPACITY", str(DEFAULT_DEDUPE_CAPACITY))),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
