"""Formatação das notificações (HTML do Telegram).

Funções puras: sem IO e sem estado. Todo texto vindo do usuário passa por
`escape_html`; texto livre é truncado com "…".
"""

from __future__ import annotations

import html
import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.protocols.models import FollowAction

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from app.protocols.models import FollowEvent, PostEvent, TradeEvent

PROFILE_URL_BASE = "https://farcaster.xyz"
CAST_URL_BASE = "https://farcaster.xyz/~/conversations"
DISPLAY_UTC_OFFSET = timedelta(hours=7)
ELLIPSIS = "…"

POST_TEXT_MAX_CHARS = 320
DIAGNOSTIC_PAYLOAD_MAX_CHARS = 1000

# Explorer por rede (nome normalizado em minúsculas)
TX_EXPLORERS: dict[str, str] = {
    "base": "https://basescan.org/tx/",
    "ethereum": "https://etherscan.io/tx/",
    "mainnet": "https://etherscan.io/tx/",
    "optimism": "https://optimistic.etherscan.io/tx/",
    "arbitrum": "https://arbiscan.io/tx/",
    "polygon": "https://polygonscan.com/tx/",
    "solana": "https://solscan.io/tx/",
}


def escape_html(text: str) -> str:
    return html.escape(text, quote=False)


def truncate(text: str, max_chars: int) -> str:
    """Corta em `max_chars` caracteres, contando o "…" final."""
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + ELLIPSIS


def format_timestamp(timestamp_ms: int) -> str:
    """Epoch ms → `DD/MM HH:MM` em UTC+7 (offset fixo)."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC) + DISPLAY_UTC_OFFSET
    return moment.strftime("%d/%m %H:%M")


def profile_link(name: str) -> str:
    """Link HTML para o perfil; `name` já resolvido (nunca vazio)."""
    href = html.escape(f"{PROFILE_URL_BASE}/{name}", quote=True)
    return f'<a href="{href}">{escape_html(name)}</a>'


def format_follow(event: FollowEvent, actor_name: str, target_name: str) -> str:
    verb = "FOLLOWED" if event.action is FollowAction.CREATED else "UNFOLLOWED"
    lines = [
        f"{profile_link(actor_name)} <b>{verb}</b> {profile_link(target_name)}",
        format_timestamp(event.timestamp),
    ]
    return "\n".join(lines)


def format_profile_update(name: str, change_lines: Sequence[str], timestamp_ms: int) -> str:
    """Linhas de mudança já vêm escapadas pelo diff."""
    lines = [f"{profile_link(name)} <b>UPDATED PROFILE</b>"]
    lines.extend(change_lines)
    lines.append(format_timestamp(timestamp_ms))
    return "\n".join(lines)


def format_post(event: PostEvent, author_name: str) -> str:
    lines = [f"{profile_link(author_name)} <b>CASTED</b>"]
    if event.text:
        lines.append(escape_html(truncate(event.text, POST_TEXT_MAX_CHARS)))
    if event.channel_ref:
        lines.append(f"channel: {escape_html(event.channel_ref)}")
    if event.post_ref:
        href = html.escape(f"{CAST_URL_BASE}/{event.post_ref}", quote=True)
        lines.append(f'<a href="{href}">view cast</a>')
    lines.append(format_timestamp(event.timestamp))
    return "\n".join(lines)


def _format_amount(amount_usd: float | None) -> str | None:
    if amount_usd is None:
        return None
    return f"${amount_usd:,.2f}"


def tx_link(tx_ref: str, chain: str | None) -> str:
    """Link do explorer da rede; rede desconhecida → hash em `<code>`."""
    explorer = TX_EXPLORERS.get((chain or "base").strip().lower())
    if explorer is None:
        return f"tx: <code>{escape_html(tx_ref)}</code>"
    href = html.escape(f"{explorer}{tx_ref}", quote=True)
    return f'<a href="{href}">view tx</a>'


def format_trade(event: TradeEvent, trader_name: str) -> str:
    token_in = escape_html(event.token_in or "?")
    token_out = escape_html(event.token_out or "?")
    parts = [f"{profile_link(trader_name)} <b>SWAPPED</b>"]
    amount = _format_amount(event.amount_usd)
    if amount:
        parts.append(amount)
    parts.append(f"{token_in} → {token_out}")
    lines = [" ".join(parts)]

    details: list[str] = []
    if event.chain:
        details.append(f"on {escape_html(event.chain)}")
    if event.tx_ref:
        details.append(tx_link(event.tx_ref, event.chain))
    if details:
        lines.append(" · ".join(details))

    lines.append(format_timestamp(event.timestamp))
    return "\n".join(lines)


def format_diagnostic(payload: Mapping[str, Any], reason: str | None = None) -> str:
    """Aviso de payload ilegível com o JSON bruto (primeiros 1000 chars)."""
    raw = json.dumps(payload, ensure_ascii=False, default=str)[:DIAGNOSTIC_PAYLOAD_MAX_CHARS]
    header = "⚠️ Could not read identifiers from payload."
    if reason:
        header = f"{header} ({escape_html(reason)})"
    return f"{header}\n<pre>{escape_html(raw)}</pre>"
