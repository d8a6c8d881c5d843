"""Coerção de valores brutos do payload Neynar.

Valores inválidos viram None; nunca zero, nunca exceção.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

# Abaixo disso um epoch numérico é interpretado como segundos (≈ 1973 em ms)
_EPOCH_MS_THRESHOLD = 100_000_000_000

# Maior epoch ms que ainda cabe em datetime depois do offset de exibição
_MAX_TIMESTAMP_MS = int(datetime(9999, 12, 30, tzinfo=UTC).timestamp() * 1000)


def coerce_id(value: Any) -> int | None:
    """Converte um identificador (fid) para int positivo.

    Aceita int, float integral e string de dígitos. bool, não numéricos,
    frações e valores <= 0 resultam em None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped.isdigit():
            return None
        number = int(stripped)
    else:
        return None
    return number if number > 0 else None


def coerce_text(value: Any) -> str | None:
    """String não vazia (após strip) ou None."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def coerce_float(value: Any) -> float | None:
    """Número finito (aceita string numérica) ou None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_timestamp_ms(value: Any) -> int | None:
    """Converte timestamp bruto em epoch milissegundos.

    - número/string numérica < 1e11: segundos (×1000)
    - número/string numérica >= 1e11: milissegundos
    - string ISO-8601 (com "Z" ou offset; sem offset = UTC)
    - fora do intervalo exibível de datetime: None
    """
    number = coerce_float(value)
    if number is not None:
        if number <= 0:
            return None
        if number < _EPOCH_MS_THRESHOLD:
            return _within_range(int(number * 1000))
        return _within_range(int(number))

    text = coerce_text(value)
    if text is None:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return _within_range(int(parsed.timestamp() * 1000))


def seconds_to_ms(value: float | None) -> int | None:
    """`created_at` de nível de evento (sempre em segundos) para ms."""
    if value is None or value <= 0:
        return None
    return _within_range(int(value * 1000))


def _within_range(timestamp_ms: int) -> int | None:
    return timestamp_ms if 0 < timestamp_ms <= _MAX_TIMESTAMP_MS else None
