"""Tabelas de regras de extração por campo lógico.

O provedor popula subconjuntos diferentes de campos conforme a versão do
payload. Cada campo lógico tem uma tupla ORDENADA de caminhos candidatos;
vence o primeiro caminho cujo valor não é nulo, e só então o valor é
coagido (um valor presente porém inválido não cai para o próximo
caminho). A ordem das tuplas é contrato: não reordenar.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

FieldRule = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Regra pura: caminho de chaves aninhadas dentro de um objeto."""

    keys: tuple[str, ...]

    def __call__(self, obj: Mapping[str, Any]) -> Any:
        current: Any = obj
        for key in self.keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    def __repr__(self) -> str:
        return f"path({'.'.join(self.keys)})"


def path(*keys: str) -> FieldPath:
    """Atalho: `path("user", "fid")` lê `obj["user"]["fid"]`."""
    return FieldPath(tuple(keys))


def first_value(obj: Mapping[str, Any], rules: tuple[FieldRule, ...]) -> Any:
    """Valor bruto da primeira regra que retorna algo não nulo."""
    for rule in rules:
        value = rule(obj)
        if value is not None:
            return value
    return None


def extract(
    obj: Mapping[str, Any],
    rules: tuple[FieldRule, ...],
    coerce: Callable[[Any], T | None],
) -> T | None:
    """Aplica a cadeia de regras e coage o valor vencedor."""
    value = first_value(obj, rules)
    return None if value is None else coerce(value)


def any_present(obj: Mapping[str, Any], rules: tuple[FieldRule, ...]) -> bool:
    """True se alguma regra encontra valor não nulo e não vazio."""
    return any(rule(obj) not in (None, "", {}) for rule in rules)


# ── follow.created / follow.deleted ──────────────────────────────────────────

FOLLOW_ACTOR_ID = (
    path("actor_fid"),
    path("user", "fid"),
    path("user_fid"),
    path("follower_fid"),
    path("from_fid"),
)
FOLLOW_TARGET_ID = (
    path("target_fid"),
    path("target_user", "fid"),
    path("followed_fid"),
    path("to_fid"),
)
FOLLOW_ACTOR_NAME = (
    path("user", "username"),
    path("actor", "username"),
    path("user_username"),
)
FOLLOW_TARGET_NAME = (
    path("target_user", "username"),
    path("target", "username"),
    path("target_username"),
)
FOLLOW_TIMESTAMP = (
    path("timestamp"),
    path("event_timestamp"),
)

# ── cast.created ─────────────────────────────────────────────────────────────

# Referência a cast pai: qualquer uma presente => reply/quote (não raiz)
POST_PARENT_CAST_REFS = (
    path("parent_hash"),
    path("parentHash"),
    path("parent", "hash"),
    path("parent_merkle_root"),
    path("replyParentMerkleRoot"),
    path("rootParentHash"),
)
# Referência a canal: informativa, NÃO afeta a classificação de raiz
POST_CHANNEL_REFS = (
    path("parent_url"),
    path("parentUri"),
    path("channel", "url"),
)
POST_AUTHOR_ID = (
    path("author", "fid"),
    path("author_fid"),
    path("fid"),
    path("user", "fid"),
)
POST_AUTHOR_NAME = (
    path("author", "username"),
    path("author_username"),
    path("user", "username"),
)
POST_TEXT = (
    path("text"),
    path("body", "text"),
)
POST_REF = (
    path("hash"),
    path("cast_hash"),
    path("castHash"),
)
POST_TIMESTAMP = (path("timestamp"),)

# ── trade.created ────────────────────────────────────────────────────────────

TRADE_TRADER_ID = (
    path("trader", "fid"),
    path("trader_fid"),
)
TRADE_TRADER_NAME = (
    path("trader", "username"),
    path("trader_username"),
)
TRADE_NET_TRANSFER = (
    path("transaction", "net_transfer"),
    path("net_transfer"),
)
# Aplicadas sobre o objeto net_transfer
NET_TRANSFER_TOKEN_IN = (path("sending_fungible", "token", "symbol"),)
NET_TRANSFER_TOKEN_OUT = (path("receiving_fungible", "token", "symbol"),)
NET_TRANSFER_AMOUNT_USD = (
    path("sending_fungible", "balance", "in_usdc"),
    path("receiving_fungible", "balance", "in_usdc"),
)
TRADE_TX_REF = (
    path("transaction", "hash"),
    path("tx_hash"),
    path("transaction_hash"),
)
TRADE_CHAIN = (
    path("transaction", "network", "name"),
    path("network", "name"),
    path("network"),
    path("chain"),
)

# ── user.updated ─────────────────────────────────────────────────────────────

PROFILE_ID = (
    path("fid"),
    path("user", "fid"),
    path("user_fid"),
)
PROFILE_NAME = (
    path("username"),
    path("user", "username"),
)
PROFILE_BEFORE = (
    path("before"),
    path("previous"),
    path("old"),
)
PROFILE_AFTER = (
    path("after"),
    path("current"),
    path("new"),
)
PROFILE_UPDATED_FIELDS = (
    path("updated_fields"),
    path("updatedFields"),
    path("changed_fields"),
)
PROFILE_TIMESTAMP = (path("timestamp"),)
