"""Validação de assinatura HMAC-SHA512 dos webhooks Neynar.

Sempre sobre os bytes brutos do corpo, ANTES de qualquer decode JSON.
Sem secret configurado a verificação é permissiva (toda entrega passa):
modo de operação para ambientes que ainda não provisionaram o secret.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.settings.neynar import NEYNAR_SIGNATURE_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação.

    Attributes:
        valid: True se a entrega pode ser processada
        skipped: True se aceita sem verificar (sem secret)
        error: Motivo curto da falha (sem dados sensíveis)
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Hex digest HMAC-SHA512 de `raw_body` com `secret`."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha512).hexdigest()


def is_valid_signature(raw_body: bytes, signature: str | None, secret: str | None) -> bool:
    """Valida assinatura; nunca levanta.

    Args:
        raw_body: Corpo bruto da requisição
        signature: Valor do header X-Neynar-Signature
        secret: Secret do webhook (None/"" = modo permissivo)

    Returns:
        True se válida ou se não há secret configurado.
    """
    if not secret:
        return True
    if not signature:
        return False
    computed = compute_signature(raw_body, secret).encode("ascii")
    # Header chega decodificado como latin-1; compara bytes para não levantar
    provided = signature.strip().lower().encode("utf-8", "replace")
    return hmac.compare_digest(computed, provided)


def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def verify_neynar_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Verifica o header de assinatura de uma entrega.

    Args:
        raw_body: Corpo bruto
        headers: Headers recebidos (lookup case-insensitive)
        secret: Secret do webhook

    Returns:
        SignatureResult
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    signature = _header_value(headers, NEYNAR_SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not is_valid_signature(raw_body, signature, secret):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
