"""Settings específicas do Neynar (provedor de webhooks Farcaster).

Cobre o lado inbound (secret do webhook) e o lookup de perfis em lote
(API v2 `user/bulk`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

NEYNAR_API_BASE_URL: str = "https://api.neynar.com"
NEYNAR_WEBHOOK_PATH: str = "/webhooks/neynar"
NEYNAR_SIGNATURE_HEADER: str = "X-Neynar-Signature"
DEFAULT_PROFILE_CACHE_TTL_SECONDS = 600  # 10 minutos


@dataclass(frozen=True)
class NeynarSettings:
    """Configurações do canal Neynar.

    Attributes:
        webhook_secret: Secret HMAC-SHA512 do webhook. Vazio = modo
            permissivo (toda assinatura é aceita).
        api_key: Chave da API Neynar para lookup de perfis
        api_base_url: URL base da API
        webhook_path: Caminho HTTP do webhook
        request_timeout_seconds: Timeout do lookup em lote
        max_retries: Tentativas extras em 429/5xx/erro de conexão
        profile_cache_ttl_seconds: TTL das entradas do cache de perfis
    """

    webhook_secret: str = ""
    api_key: str = ""

    api_base_url: str = NEYNAR_API_BASE_URL
    webhook_path: str = NEYNAR_WEBHOOK_PATH

    request_timeout_seconds: float = 10.0
    max_retries: int = 1

    profile_cache_ttl_seconds: int = DEFAULT_PROFILE_CACHE_TTL_SECONDS

    @property
    def signature_required(self) -> bool:
        """True quando há secret configurado (assinatura obrigatória)."""
        return bool(self.webhook_secret)

    @property
    def bulk_users_endpoint(self) -> str:
        """URL do lookup em lote de usuários."""
        return f"{self.api_base_url.rstrip('/')}/v2/farcaster/user/bulk/"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Neynar.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.webhook_secret:
            errors.append(
                "NEYNAR_WEBHOOK_SECRET não configurado (assinatura não será verificada)"
            )

        if not self.api_key:
            errors.append("NEYNAR_API_KEY não configurado")

        if not self.webhook_path.startswith("/"):
            errors.append("NEYNAR_WEBHOOK_PATH deve começar com '/'")

        if self.request_timeout_seconds <= 0:
            errors.append("NEYNAR_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("NEYNAR_MAX_RETRIES deve ser >= 0")

        if self.profile_cache_ttl_seconds <= 0:
            errors.append("PROFILE_CACHE_TTL_SECONDS deve ser > 0")

        return errors


def _load_neynar_from_env() -> NeynarSettings:
    """Carrega NeynarSettings de variáveis de ambiente."""
    return NeynarSettings(
        webhook_secret=os.getenv("NEYNAR_WEBHOOK_SECRET", ""),
        api_key=os.getenv("NEYNAR_API_KEY", ""),
        api_base_url=os.getenv("NEYNAR_API_BASE_URL", NEYNAR_API_BASE_URL),
        webhook_path=os.getenv("NEYNAR_WEBHOOK_PATH", NEYNAR_WEBHOOK_PATH),
        request_timeout_seconds=float(os.getenv("NEYNAR_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("NEYNAR_MAX_RETRIES", "1")),
        profile_cache_ttl_seconds=int(
            os.getenv("PROFILE_CACHE_TTL_SECONDS", str(DEFAULT_PROFILE_CACHE_TTL_SECONDS))
        ),
    )


@lru_cache(maxsize=1)
def get_neynar_settings() -> NeynarSettings:
    """Retorna instância cacheada de NeynarSettings."""
    return _load_neynar_from_env()
