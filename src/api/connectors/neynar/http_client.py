"""Cliente HTTP do lookup de perfis em lote (Neynar `user/bulk`).

Uma requisição GET por lote, com os ids em `fids=1,2,3`. Registros sem
`fid` inteiro ou sem nenhum campo de perfil são descartados; o cache
trata ids ausentes como não resolvidos.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.normalizers.neynar._coercion import coerce_id
from api.normalizers.neynar.profile import snapshot_from_mapping
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import ProfileLookupError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.profile import ProfileSnapshot
    from config.settings import NeynarSettings

logger: logging.Logger = logging.getLogger(__name__)

# Chaves onde a lista de usuários pode vir na resposta
_USER_LIST_KEYS: tuple[str, ...] = ("users", "result", "data")


def _user_records(body: Any) -> list[dict[str, Any]]:
    if not isinstance(body, dict):
        return []
    for key in _USER_LIST_KEYS:
        value = body.get(key)
        if isinstance(value, dict) and isinstance(value.get("users"), list):
            value = value["users"]
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
    return []


class NeynarHttpClient(HttpClient):
    """Lookup em lote de perfis via API Neynar."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        config: HttpClientConfig | None = None,
    ) -> None:
        super().__init__(config)
        self._endpoint = endpoint
        self._api_key = api_key

    async def fetch_profiles(self, ids: Sequence[int]) -> dict[int, ProfileSnapshot]:
        """Busca snapshots para `ids` numa única chamada.

        Raises:
            ProfileLookupError: api_key ausente, status != 2xx ou corpo inválido
            HttpError: retries esgotados em 429/5xx/erro de conexão
        """
        if not ids:
            return {}
        if not self._api_key:
            raise ProfileLookupError("neynar_api_key_missing")

        response = await self.get(
            self._endpoint,
            params={"fids": ",".join(str(profile_id) for profile_id in ids)},
            headers={"accept": "application/json", "x-api-key": self._api_key},
        )
        if response.status_code >= 400:
            raise ProfileLookupError(f"neynar_lookup_status:{response.status_code}")

        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            raise ProfileLookupError("neynar_lookup_invalid_json") from exc

        profiles: dict[int, ProfileSnapshot] = {}
        for record in _user_records(body):
            profile_id = coerce_id(record.get("fid"))
            snapshot = snapshot_from_mapping(record)
            if profile_id is None or snapshot is None:
                continue
            profiles[profile_id] = snapshot

        logger.debug(
            "neynar_bulk_lookup_ok",
            extra={"requested": len(ids), "returned": len(profiles)},
        )
        return profiles


def create_neynar_http_client(
    settings: NeynarSettings | None = None,
    transport: Any = None,
) -> NeynarHttpClient:
    """Factory do cliente Neynar com config do ambiente.

    Args:
        settings: NeynarSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx opcional (testes)
    """
    from config.settings import get_neynar_settings

    neynar = settings or get_neynar_settings()
    config = HttpClientConfig(
        timeout_seconds=neynar.request_timeout_seconds,
        max_retries=neynar.max_retries,
        transport=transport,
    )
    return NeynarHttpClient(
        endpoint=neynar.bulk_users_endpoint,
        api_key=neynar.api_key,
        config=config,
    )


__all__ = ["HttpError", "NeynarHttpClient", "create_neynar_http_client"]
